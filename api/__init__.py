"""FastAPI host for the GOV.UK form components."""
