"""
Backend de Fisco: feed de outfits, likes, guardados y comentarios.

`app.main` levanta la API (FastAPI); `app.client` es la librería que usa
la UI para los botones optimistas y el scroll infinito.
"""
