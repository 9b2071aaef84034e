"""
Devotional - Fil vidéo vertical avec modération.

Ce package fournit le moteur de fil (une seule vidéo active à la fois,
pilotée par la position de défilement) et la machine d'états de visibilité
qui décide quelles vidéos peuvent apparaître dans le fil.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports)
- services/ : Couche application (visibilité, modération, fil, lecture)
- adapters/ : Couche infrastructure (CLI, stockage média, téléchargement)
- infrastructure/ : Persistance SQLModel
"""
