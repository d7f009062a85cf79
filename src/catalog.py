"""Fixed catalog of pages under visual test and the URL builder."""

from __future__ import annotations

from collections.abc import Sequence

PAGE_PATHS: tuple[str, ...] = (
    "/",
    "/platform/",
    "/solutions/validate-exposures/",
    "/solutions/exposure-prioritization/",
    "/attack-path-discovery/",
    "/automated-mitigation/",
    "/solutions/optimize-threat-resilience/",
    "/solutions/exposure-management/",
    "/solutions/validate-response/",
    "/roles-ciso-cio/",
    "/roles-soc-manager/",
    "/red-teaming/",
    "/vulnerability-management/",
    "/cybersecurity-glossary/",
    "/threat-exposure-validation-impact-report/",
    "/reviews/",
    "/ctem-portal/",
    "/mitre-attack/",
    "/cymulate-technology-alliances-partners/",
    "/about-us/",
    "/cymulate-vs-competitors/",
    "/careers/",
    "/contact-us/",
    "/schedule-a-demo/",
    "/customers/",
    "/customers/hertz-israel-reduced-cyber-risk-by-81-percent-within-four-months-with-cymulate/",
    "/guide/buyers-guide-to-exposure-management/",
    "/brochure/cymulate-mssp-program-overview/",
    "/data-sheet/custom-attacks/",
    "/ebook/successful-ctem-depends-on-validation/",
    "/report/gartner-strategic-roadmap-ctem/",
    "/events/cymulate-at-govware-2025-booth-g30/",
    "/press-releases/g2-fall-2025-exposure-management/",
    "/cybersecurity-glossary/adversary-emulation/",
    "/blog/zero-click-one-ntlm-microsoft-security-patch-bypass-cve-2025-50154/",
)


def trim_base_url(base_url: str) -> str:
    """Drop a single trailing slash, if present."""
    return base_url[:-1] if base_url.endswith("/") else base_url


def build_urls(base_url: str, paths: Sequence[str] = PAGE_PATHS) -> list[str]:
    """Join each catalog path onto the base URL, preserving catalog order."""
    base = trim_base_url(base_url)
    return [base + path for path in paths]
