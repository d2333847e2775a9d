"""Domain protocols (ports).

Infrastructure implements these; application handlers depend only on them.
"""

from finsync.domain.protocols.credential_store_protocol import (
    CredentialStoreProtocol,
)
from finsync.domain.protocols.insight_generator_protocol import (
    InsightGeneratorProtocol,
)
from finsync.domain.protocols.oauth_client_protocol import (
    OAuthClientProtocol,
    OAuthTokens,
)
from finsync.domain.protocols.transaction_persistence_protocol import (
    PersistOutcome,
    TransactionPersistenceProtocol,
)
from finsync.domain.protocols.transaction_provider_protocol import (
    TransactionProviderProtocol,
)
from finsync.domain.protocols.user_context_protocol import UserContextProtocol

__all__ = [
    "CredentialStoreProtocol",
    "InsightGeneratorProtocol",
    "OAuthClientProtocol",
    "OAuthTokens",
    "PersistOutcome",
    "TransactionPersistenceProtocol",
    "TransactionProviderProtocol",
    "UserContextProtocol",
]
