import json
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, Set

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from webdriver_manager.chrome import ChromeDriverManager

from seo_assistant.platform.config import settings
from seo_assistant.platform.exceptions import AuditTimeout, SiteUnreachable
from seo_assistant.platform.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RenderedPage:
    """A loaded page. The driver stays usable until the render context exits."""
    url: str
    final_url: Optional[str]
    http_status: Optional[int]
    load_time_ms: int
    driver: webdriver.Chrome


class NetworkTracker:
    """
    Follows Chrome DevTools network events read from the performance log.

    Keeps the set of in-flight request ids and the response of the main
    document request (the first request of type "Document").
    """

    def __init__(self):
        self.inflight: Set[str] = set()
        self.document_request_id: Optional[str] = None
        self.document_status: Optional[int] = None
        self.document_error: Optional[str] = None
        self.final_url: Optional[str] = None

    def consume(self, entries: Iterable[dict]) -> None:
        for entry in entries:
            try:
                message = json.loads(entry["message"])["message"]
            except (KeyError, TypeError, ValueError):
                continue

            method = message.get("method", "")
            params = message.get("params", {})
            request_id = params.get("requestId")

            if method == "Network.requestWillBeSent":
                self.inflight.add(request_id)
                if self.document_request_id is None and params.get("type") == "Document":
                    self.document_request_id = request_id
            elif method == "Network.responseReceived":
                if request_id == self.document_request_id:
                    response = params.get("response", {})
                    self.document_status = int(response.get("status", 0)) or None
                    self.final_url = response.get("url")
            elif method in ("Network.loadingFinished", "Network.loadingFailed"):
                self.inflight.discard(request_id)
                if (
                    method == "Network.loadingFailed"
                    and request_id == self.document_request_id
                    and not params.get("canceled")
                ):
                    self.document_error = params.get("errorText")


class PageRenderer:
    """Loads pages in a headless Chrome and waits for network quiescence"""

    def __init__(
        self,
        driver_factory: Optional[Callable[[], webdriver.Chrome]] = None,
        timeout: Optional[float] = None,
        quiet_window_ms: Optional[int] = None,
        max_inflight: Optional[int] = None,
        poll_interval: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        driver_factory must return a Chrome driver with the performance log enabled
        (capability "goog:loggingPrefs" = {"performance": "ALL"}), as build_driver
        does. Quiescence and the HTTP status are read from that log.
        """
        self.driver_factory = driver_factory or PageRenderer.build_driver
        self.timeout = timeout if timeout is not None else settings.RENDER_TIMEOUT_SECONDS
        self.quiet_window_ms = (
            quiet_window_ms if quiet_window_ms is not None else settings.QUIET_WINDOW_MS
        )
        self.max_inflight = (
            max_inflight if max_inflight is not None else settings.MAX_INFLIGHT_REQUESTS
        )
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

    @staticmethod
    def build_driver(user_agent: Optional[str] = None) -> webdriver.Chrome:
        chrome_options = Options()
        chrome_options.add_argument("--headless")
        chrome_options.add_argument("--no-sandbox")
        chrome_options.add_argument("--disable-dev-shm-usage")
        chrome_options.add_argument("--disable-gpu")
        chrome_options.add_argument(f"--user-agent={user_agent or settings.BOT_USER_AGENT}")
        chrome_options.set_capability("goog:loggingPrefs", {"performance": "ALL"})

        if settings.CHROMEDRIVER_PATH:
            driver_service = Service(executable_path=settings.CHROMEDRIVER_PATH)
            return webdriver.Chrome(service=driver_service, options=chrome_options)
        if settings.USE_WEBDRIVER_MANAGER:
            driver_service = Service(ChromeDriverManager().install())
            return webdriver.Chrome(service=driver_service, options=chrome_options)
        return webdriver.Chrome(options=chrome_options)

    @contextmanager
    def render(self, url: str) -> Iterator[RenderedPage]:
        """
        Load a page and yield it. The browser is torn down when the block exits,
        whether it exits normally, with an error, or on timeout.

        Raises:
            AuditTimeout: navigation or quiescence not reached within the timeout
            SiteUnreachable: connection failure or a final status outside 200-399

        Example:
            with PageRenderer().render("https://example.com") as page:
                signals = SignalExtractor.extract(page)
        """
        driver = self.driver_factory()
        try:
            yield self._load(driver, url)
        finally:
            self._teardown(driver, url)

    def _load(self, driver: webdriver.Chrome, url: str) -> RenderedPage:
        tracker = NetworkTracker()
        try:
            driver.set_page_load_timeout(self.timeout)
        except WebDriverException as e:
            raise SiteUnreachable(url, reason=e.msg or str(e))

        logger.info(f"Navigating to {url}")
        start = self._clock()
        try:
            driver.get(url)
        except TimeoutException:
            raise AuditTimeout(url, self.timeout)
        except WebDriverException as e:
            raise SiteUnreachable(url, reason=e.msg or str(e))

        tracker.consume(self._read_network_log(driver, url))
        self._check_document(url, tracker)

        finished = self._wait_for_quiescence(driver, tracker, url, start)
        load_time_ms = int(round((finished - start) * 1000))
        logger.info(f"Loaded {url} in {load_time_ms}ms (status {tracker.document_status})")

        final_url = tracker.final_url
        if final_url is None:
            try:
                final_url = driver.current_url
            except WebDriverException as e:
                raise SiteUnreachable(url, reason=e.msg or str(e))

        return RenderedPage(
            url=url,
            final_url=final_url,
            http_status=tracker.document_status,
            load_time_ms=load_time_ms,
            driver=driver,
        )

    def _read_network_log(self, driver: webdriver.Chrome, url: str) -> list:
        try:
            return driver.get_log("performance")
        except TimeoutException:
            raise AuditTimeout(url, self.timeout)
        except WebDriverException as e:
            raise SiteUnreachable(url, reason=e.msg or str(e))

    @staticmethod
    def _check_document(url: str, tracker: NetworkTracker) -> None:
        status = tracker.document_status
        if status is None:
            if tracker.document_error:
                raise SiteUnreachable(url, reason=tracker.document_error)
            logger.warning(f"Could not determine HTTP status for {url}")
            return
        if not 200 <= status < 400:
            raise SiteUnreachable(url, status=status)

    def _wait_for_quiescence(
        self, driver: webdriver.Chrome, tracker: NetworkTracker, url: str, start: float
    ) -> float:
        """Poll until at most max_inflight requests stay open for the quiet window."""
        deadline = start + self.timeout
        quiet_since = None

        while True:
            tracker.consume(self._read_network_log(driver, url))
            now = self._clock()

            if len(tracker.inflight) <= self.max_inflight:
                if quiet_since is None:
                    quiet_since = now
                if (now - quiet_since) * 1000 >= self.quiet_window_ms:
                    return now
            else:
                quiet_since = None

            if now >= deadline:
                raise AuditTimeout(url, self.timeout)
            self._sleep(self.poll_interval)

    @staticmethod
    def _teardown(driver: webdriver.Chrome, url: str) -> None:
        try:
            driver.quit()
        except Exception as e:
            logger.warning(f"Error closing browser for {url}: {str(e)}")
