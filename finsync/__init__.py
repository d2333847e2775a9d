"""FinSync: resilient integration layer for external financial data providers.

Pulls sales and bank transactions from third-party providers, keeps OAuth
credentials fresh, and produces financial insights through a cascade of
language-model candidates with a deterministic local fallback.
"""

__version__ = "0.1.0"
