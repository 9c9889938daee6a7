"""CLI sub-apps: media, notes, db."""
