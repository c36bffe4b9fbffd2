"""Business logic for accounts and events."""
