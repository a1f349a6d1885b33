"""Provider adapters. Each one normalizes its source and never raises on provider failure."""
