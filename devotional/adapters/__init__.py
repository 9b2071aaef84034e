"""
Couche adaptateurs : implémentations concrètes des ports.

- media/ : Dépôt local des fichiers et téléchargement HTTP
- cli/ : Interface en ligne de commande (Typer + Rich)
"""
