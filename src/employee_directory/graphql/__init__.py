"""GraphQL schema, types and resolvers for the directory API."""
