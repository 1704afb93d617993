"""Research Project Advisor backend."""
