"""Page-side JavaScript executed by Percy before each snapshot."""

from __future__ import annotations

IMAGE_TIMEOUT_MS = 5000
SETTLE_DELAY_MS = 500

_WAIT_FOR_ASSETS_TEMPLATE = """\
const sleep = (ms) => new Promise((resolve) => setTimeout(resolve, ms));
const scrollStep = window.innerHeight || 800;
while (document.documentElement.scrollTop + window.innerHeight < document.documentElement.scrollHeight) {{
  window.scrollBy(0, scrollStep);
  await sleep(100);
}}
window.scrollTo(0, 0);
const images = Array.from(document.querySelectorAll('img'));
await Promise.all(
  images.map((img) => {{
    if (img.complete) return Promise.resolve();
    return new Promise((resolve) => {{
      img.onload = resolve;
      img.onerror = resolve;
      setTimeout(resolve, {image_timeout_ms});
    }});
  }})
);
await sleep({settle_delay_ms});
if (document.fonts && document.fonts.ready) {{
  await document.fonts.ready;
}}
"""


def build_wait_script(
    image_timeout_ms: int = IMAGE_TIMEOUT_MS,
    settle_delay_ms: int = SETTLE_DELAY_MS,
) -> str:
    """Return the scroll-and-wait script run in the snapshot browser.

    Scrolls to the bottom in viewport-height steps so lazy images start
    loading, returns to the top, waits for every image to load or fail
    (each capped at ``image_timeout_ms``), settles, then waits for web fonts.
    """
    return _WAIT_FOR_ASSETS_TEMPLATE.format(
        image_timeout_ms=image_timeout_ms,
        settle_delay_ms=settle_delay_ms,
    )


WAIT_FOR_ASSETS_SCRIPT = build_wait_script()
