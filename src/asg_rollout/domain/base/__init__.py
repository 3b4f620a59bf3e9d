"""Domain base: exceptions and ports."""
