"""Service layer: comparators, wire conversion, and eligibility evaluation."""
