"""Business logic services used by handlers.

Services receive their AWS clients through constructors; handlers build
them lazily so importing a handler never opens a connection.
"""

# Do NOT import services here - use lazy loading in handlers instead
