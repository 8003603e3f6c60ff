"""
Errors raised from GraphQL resolvers
"""


class ResolverError(Exception):
    """A failure whose message is safe to show to API clients.

    Production error masking leaves these messages intact and replaces
    everything else with a generic message.
    """
