"""Dominio de create-odd-app: referencias de template, destino, intentos de descarga y elecciones del usuario.

Sin I/O: HTTP, filesystem y subprocess viven en `adapters`.
"""
