"""check-cx admin: check config management API and client-side state layer."""
