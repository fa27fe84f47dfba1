"""Portal API: accounts and sessions for the game portal."""
