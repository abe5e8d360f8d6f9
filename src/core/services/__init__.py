"""Application services: auth flows and async resource state."""
