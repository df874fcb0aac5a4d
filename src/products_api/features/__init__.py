"""Feature slices: one subpackage per endpoint."""
