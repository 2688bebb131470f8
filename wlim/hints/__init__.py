"""Label generation and keystroke matching for one hint session."""
