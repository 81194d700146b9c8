"""Host name to adapter address resolution strategies."""
