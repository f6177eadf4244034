"""swapleg -- expansion of parameterized swap legs into concrete cashflow events."""
