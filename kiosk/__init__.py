"""Kiosk POS backend: per-user catalog, sales and subscription-gated access."""
