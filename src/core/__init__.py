"""
Core domain models, fixed-point math, and JSON contracts.

Foundational building blocks of the issuers, independent of any
collateral asset implementation or ledger storage.
"""
