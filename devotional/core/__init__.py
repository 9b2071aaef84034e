"""
Couche domaine (core).

Contient les entités métier et les ports (interfaces abstraites).
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entités métier (Video, VideoDraft)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
"""
