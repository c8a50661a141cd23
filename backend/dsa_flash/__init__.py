"""DSA Flash: algorithm study tracker backend and synchronizing client."""
