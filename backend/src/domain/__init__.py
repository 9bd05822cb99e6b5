"""Domain layer: ports, value objects and pure matching rules"""
