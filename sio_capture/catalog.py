"""
Catalogue: paliers de prix (EUR) et références d'order.
- 19.00: Starter seul
- 24.00: Starter + Mini (order bump)
"""
CURRENCY = "EUR"

STARTER_PRICE = "19.00"
BUNDLE_PRICE = "24.00"

# Montant retenu quand ni PayPal ni l'appelant n'en fournissent
DEFAULT_PAID_AMOUNT = STARTER_PRICE

STARTER_REFERENCE = "STARTER-ONLY"
BUNDLE_REFERENCE = "STARTER+MINI-BUNDLE"
