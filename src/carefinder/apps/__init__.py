"""CareFinder Apps - presentation layers over the search core."""
