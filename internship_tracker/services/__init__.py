"""Query, pagination and analytics services."""
