"""Great Sage System: personal life-management backend."""
