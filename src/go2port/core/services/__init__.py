"""Servicios del Core: resolución de identidad, dependencias y el pipeline."""
