"""Mock factories for the test suite."""
