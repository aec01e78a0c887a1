"""Terminal front end for tap tempo estimation."""
