"""Weather harvesting package.

Crawls province listing pages of a public weather site, dispatches one
bounded, rate-limited fetch-and-extract task per city detail page, and
reports a reading (area name, temperature) for each.

Key modules:
    config          -- Province list, URL templates, selectors, HarvestSettings
    models          -- WeatherReading, TaskOutcome, HarvestSummary dataclasses
    errors          -- HarvestError taxonomy (transport, extraction, crawl)
    extractor       -- WeatherExtractor for detail and listing markup
    transport       -- Shared HTTP session construction and text fetch
    rate_limiter    -- RequestDelay fixed pre-request delay
    permits         -- PermitPool counting semaphore
    base            -- BaseScraper task pipeline with failure isolation
    scrapers        -- WeatherDetailScraper concrete implementation
    crawler         -- ProvinceCrawler and province discovery
    controller      -- ThreadPoolController for dispatch and join
    metrics         -- OutcomeCollector for the run summary
    reporting       -- ConsoleReporter for user-visible output
    coordinator     -- Harvester, the run coordinator
"""
