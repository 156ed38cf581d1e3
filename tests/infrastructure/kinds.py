"""
Token kinds shared across tests.

Declaration order matters: identity tokens grow with it.
"""

from lexkit import define_token

Let = define_token("Let", exact="let")
Eq = define_token("Eq", exact="=")
Minus = define_token("Minus", exact="-")
Ident = define_token("Ident", regex=r"[A-Za-z_]\w*")
Number = define_token("Number", regex=r"\d+")
Pixels = define_token("Pixels", regex=r"(\d+)px", capture=1)
Ws = define_token("Ws", regex=r"\s+")
Neg = define_token("Neg", exact="-", payload=Number)
