"""
Couche application (cas d'utilisation).

- visibility : machine d'états des statuts de vidéo
- moderation : file de modération et décisions ponctuelles
- feed : chargement du fil et moteur d'activation
- playback : unités de lecture par vidéo
- submission : soumission contrôlée (taille, type, métadonnées)
- download : sauvegarde locale d'une vidéo
"""
