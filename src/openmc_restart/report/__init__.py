"""Track plots and PDF replay reports."""
