"""Domain service base."""


class Service:
    """Marker base for domain services.

    Services hold the behaviour that spans entities: parsing markup,
    listing threads and mutating the comment forest.
    """
