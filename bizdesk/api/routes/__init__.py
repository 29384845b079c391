"""API routes - thin adapters from HTTP to the service layer."""
