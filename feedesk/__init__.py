"""FeeDesk - fee plans, enrollments and payment ledger for a small institution."""
