"""SRD reference lookups."""
