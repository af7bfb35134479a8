"""
Domain layer.

The domain layer contains the core business logic of the application.
It has no dependencies on external frameworks or infrastructure.

This layer contains:
- Entities and aggregate roots: the question session and its lifecycle
- Value Objects: identifiers, responses, point summaries
- Domain Events: change notifications recorded by the aggregate
- Domain Services: scoring and answer-matching rules
"""
