"""site_probe.crawler: rendering, link discovery, page validation and site crawl."""
