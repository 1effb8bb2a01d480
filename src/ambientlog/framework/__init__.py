"""ambientlog.framework - integrations with logging frameworks."""
