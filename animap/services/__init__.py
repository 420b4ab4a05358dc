"""
Application services layer (use cases).

Services implement the cross-catalog resolution engine:
- season: season / cour / part number heuristics
- matcher: title similarity and candidate ranking
- resolver: priority-ordered search loop with first-accepted-wins policy

Services depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.
"""
