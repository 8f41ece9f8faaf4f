"""
Migration core: tree transformer, deferred pass queue, rule components and
the engine that runs a recipe over one compilation unit.
"""
