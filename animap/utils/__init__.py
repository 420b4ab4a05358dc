"""Utilitaires partages (constantes de scoring, normalisation de titres)."""
