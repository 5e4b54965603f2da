"""Health records API: accounts, records and time-bounded sharing."""
