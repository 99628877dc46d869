"""
Cocktail Compass: drink catalog and favorites.

This package contains:
- models: Drink, FavoriteEntry and NearbyStore schemas
- catalog: Recipe catalog clients (TheCocktailDB)
- favorites: Durable favorites store
- reconciler: Screen state combining catalog results with favorites
- nearby: Nearby store ranking by distance
- config: Environment-driven configuration
"""
