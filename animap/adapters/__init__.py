"""
Couche infrastructure: implementations concretes des ports.

- api/ : clients HTTP AniList et anicrush, retry et cache partages
"""
