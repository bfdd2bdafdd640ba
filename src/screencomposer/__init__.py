"""Screen template compositor: formatted amounts and names drawn onto fixed backgrounds."""
