"""Application settings, logging, time helpers, and error translation."""
