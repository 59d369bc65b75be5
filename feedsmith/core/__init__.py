"""Core scraping components: DOM access, synthesis, extraction, fetching."""
