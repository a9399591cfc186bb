"""ZTMM Maturity Assessment engine.

Turns raw per-item assessment statuses into gated, multi-level maturity
scores across the Pillar -> Function -> Stage hierarchy, with an explained
gap between the stage actually reached and the stage sequential gating
allows an organisation to claim.
"""

__version__ = "0.1.0"
