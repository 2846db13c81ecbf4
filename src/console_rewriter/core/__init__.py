"""
Core rewrite components: traversal engine, rewrite rule, visitor registry and
the orchestration engine.
"""
