from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

# Romanized identifiers of every province-level region, in crawl order.
PROVINCES: Tuple[str, ...] = (
    "beijing",
    "tianjin",
    "shanghai",
    "chongqing",
    "hebei",
    "shanxi",
    "neimenggu",
    "liaoning",
    "jilin",
    "heilongjiang",
    "jiangsu",
    "zhejiang",
    "anhui",
    "fujian",
    "jiangxi",
    "shandong",
    "henan",
    "hubei",
    "hunan",
    "guangdong",
    "guangxi",
    "hainan",
    "sichuan",
    "guizhou",
    "yunnan",
    "xizang",
    "shaanxi",
    "gansu",
    "qinghai",
    "ningxia",
    "xinjiang",
    "taiwan",
    "hongkong",
    "macau",
)

INDEX_URL = "https://tianqi.moji.com/weather/china"
LISTING_URL_TEMPLATE = "https://tianqi.moji.com/weather/china/{province}/"

AREA_NAME_SELECTOR = ".search_default em"
TEMPERATURE_SELECTOR = ".wea_weather.clearfix em"
HOT_CITY_SELECTOR = ".city_hot a"
PROVINCE_INDEX_SELECTOR = ".city_list.clearfix a"

DEFAULT_MAX_CONCURRENT = 5
DEFAULT_MAX_WORKERS = 16
DEFAULT_DELAY_SECS = 2.0
DEFAULT_TIMEOUT_SECS = 20.0


@dataclass(frozen=True)
class HarvestSettings:
    """Startup configuration for one harvesting pass.

    Every field defaults to the module constant of the same meaning, so
    HarvestSettings() describes the stock run over the static province list.
    """

    provinces: Tuple[str, ...] = PROVINCES
    max_concurrent: int = DEFAULT_MAX_CONCURRENT
    max_workers: int = DEFAULT_MAX_WORKERS
    delay_secs: float = DEFAULT_DELAY_SECS
    timeout_secs: float = DEFAULT_TIMEOUT_SECS
    listing_url_template: str = LISTING_URL_TEMPLATE
    index_url: str = INDEX_URL
    area_name_selector: str = AREA_NAME_SELECTOR
    temperature_selector: str = TEMPERATURE_SELECTOR
    hot_city_selector: str = HOT_CITY_SELECTOR
    province_index_selector: str = PROVINCE_INDEX_SELECTOR
    discover_provinces: bool = False
    impersonate: Optional[str] = None

    def __post_init__(self) -> None:
        if self.max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        if self.delay_secs < 0:
            raise ValueError("delay_secs must not be negative")
        if self.timeout_secs <= 0:
            raise ValueError("timeout_secs must be positive")
        if "{province}" not in self.listing_url_template:
            raise ValueError("listing_url_template must contain '{province}'")

    @property
    def worker_count(self) -> int:
        """Executor size; never smaller than the permit capacity."""
        return max(self.max_workers, self.max_concurrent)
