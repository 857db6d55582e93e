from functools import wraps
from typing import Callable, List, Optional, Tuple, TypeVar

from selenium import webdriver
from selenium.common.exceptions import (
    JavascriptException,
    NoSuchElementException,
    StaleElementReferenceException,
)
from selenium.webdriver.common.by import By

from seo_assistant.features.audit.schemas.audit import ImageSignal, SignalSet
from seo_assistant.features.audit.services.page_renderer import RenderedPage
from seo_assistant.platform.exceptions import MalformedPage
from seo_assistant.platform.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# DOM-shape errors only. Session loss and browser crashes propagate.
DOM_SHAPE_ERRORS = (StaleElementReferenceException, NoSuchElementException, JavascriptException)


def _reads_dom(func: Callable[..., T]) -> Callable[..., T]:
    """Turn DOM-shape errors raised while reading the page into MalformedPage."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DOM_SHAPE_ERRORS as e:
            raise MalformedPage(f"{func.__name__}: {e.msg or str(e)}") from e

    return wrapper


class SignalExtractor:
    """Read-only extraction of on-page SEO signals from a rendered DOM"""

    @staticmethod
    def extract(page: RenderedPage) -> SignalSet:
        driver = page.driver

        title = SignalExtractor._degrade("title", lambda: SignalExtractor.extract_title(driver), "")
        description = SignalExtractor._degrade(
            "meta description", lambda: SignalExtractor.extract_description(driver), None
        )
        h1_texts = SignalExtractor._degrade("h1", lambda: SignalExtractor.extract_h1_texts(driver), ())
        images = SignalExtractor._degrade("images", lambda: SignalExtractor.extract_images(driver), ())
        word_count = SignalExtractor._degrade(
            "body text", lambda: SignalExtractor.extract_word_count(driver), 0
        )

        return SignalSet(
            title_text=title,
            title_length=len(title),
            description_text=description,
            description_length=len(description) if description is not None else 0,
            h1_texts=h1_texts,
            images=images,
            body_word_count=word_count,
            load_time_ms=page.load_time_ms,
            http_status=page.http_status,
        )

    @staticmethod
    def _degrade(signal: str, read: Callable[[], T], default: T) -> T:
        try:
            return read()
        except MalformedPage as e:
            logger.warning(f"Malformed page, treating {signal} as missing: {e}")
            return default

    @staticmethod
    @_reads_dom
    def extract_title(driver: webdriver.Chrome) -> str:
        return (driver.title or "").strip()

    @staticmethod
    @_reads_dom
    def extract_description(driver: webdriver.Chrome) -> Optional[str]:
        """Content of <meta name="description">. None when the tag is absent."""
        elements = driver.find_elements(By.CSS_SELECTOR, 'meta[name="description"]')
        if not elements:
            return None
        return (elements[0].get_attribute("content") or "").strip()

    @staticmethod
    @_reads_dom
    def extract_h1_texts(driver: webdriver.Chrome) -> Tuple[str, ...]:
        return tuple(
            (el.get_attribute("textContent") or "").strip()
            for el in driver.find_elements(By.TAG_NAME, "h1")
        )

    @staticmethod
    @_reads_dom
    def extract_images(driver: webdriver.Chrome) -> Tuple[ImageSignal, ...]:
        images: List[ImageSignal] = []
        for img in driver.find_elements(By.TAG_NAME, "img"):
            alt = (img.get_attribute("alt") or "").strip()
            images.append(ImageSignal(src=img.get_attribute("src") or None, alt=alt or None))
        return tuple(images)

    @staticmethod
    @_reads_dom
    def extract_word_count(driver: webdriver.Chrome) -> int:
        bodies = driver.find_elements(By.TAG_NAME, "body")
        if not bodies:
            return 0
        return len((bodies[0].text or "").split())
