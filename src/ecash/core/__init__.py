"""Protocol core: acceptance, adjudication and the bank."""
