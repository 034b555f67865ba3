"""SquareIt - multi-tenant account service with private numeric records."""
