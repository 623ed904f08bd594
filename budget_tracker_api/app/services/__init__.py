"""
Service layer abstraction.

Each service encapsulates business logic for a domain and works on the
``TransactionStore`` it is given, so API handlers never talk to the
database directly.
"""
