"""Provider adapters.

Each provider lives in its own subpackage (api, mappers, schemas, provider)
and is wrapped by ResilientProviderAdapter for sandbox/live resolution.
"""
