"""Resolver package for the GraphQL schema.

Each resolver performs a single collection operation through the MongoPool
found in the GraphQL context and maps the documents to GraphQL types.
"""
