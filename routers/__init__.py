from routers import categories, orders, products, settings

ALL_ROUTERS = [products.router, categories.router, orders.router, settings.router]
