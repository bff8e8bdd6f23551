"""
Purpose: Static zone catalog for Acarigua-Araure.
Loaded once into a ZoneRegistry at startup.

Rule: No logic here, just data.
"""
from __future__ import annotations

from typing import Dict, List

from .models import City, Zone, ZoneType

ACARIGUA_ARAURE_ZONES: List[Zone] = [
    Zone(
        id="ACG-CENTRO",
        name="Centro Comercial Acarigua",
        city=City.ACARIGUA,
        center=(9.5549, -69.1953),
        radius_km=1.5,
        zone_type=ZoneType.COMMERCIAL,
        landmarks=(
            "Centro Comercial Acarigua", "Centro Comercial Los Samanes",
            "Plaza Bolívar", "Plaza Miranda", "Hospital Central",
            "Alcaldía Municipio Páez", "Bancos", "Avenida Libertador",
        ),
    ),
    Zone(
        id="ACG-TERMINAL",
        name="Terminal de Pasajeros",
        city=City.ACARIGUA,
        center=(9.5600, -69.2000),
        radius_km=0.8,
        zone_type=ZoneType.TRANSPORT,
        landmarks=(
            "Terminal de Pasajeros Acarigua",
            "Parada taxis interurbanos",
            "Avenida Circunvalación",
        ),
    ),
    Zone(
        id="ACG-INDUSTRIAL",
        name="Zona Industrial",
        city=City.ACARIGUA,
        center=(9.5400, -69.1800),
        radius_km=2.0,
        zone_type=ZoneType.INDUSTRIAL,
        landmarks=(
            "Zona Industrial Los Samanes",
            "Urb. Los Samanes I, II, III",
            "Depósitos", "Talleres",
        ),
    ),
    Zone(
        id="ACG-NORTE",
        name="Zona Residencial Norte",
        city=City.ACARIGUA,
        center=(9.5700, -69.1900),
        radius_km=1.2,
        zone_type=ZoneType.RESIDENTIAL,
        landmarks=(
            "Urb. La Candelaria", "Urb. Los Samanes", "Urb. Los Próceres",
            "Escuelas", "Iglesias", "Parques",
        ),
    ),
    Zone(
        id="ARU-CENTRO",
        name="Centro Araure",
        city=City.ARAURE,
        center=(9.5808, -69.2372),
        radius_km=1.0,
        zone_type=ZoneType.COMMERCIAL,
        landmarks=(
            "Centro Comercial Araure",
            "Plaza Bolívar Araure",
            "Hospital Dr. Egidio Montesinos",
            "Alcaldía de Araure",
        ),
    ),
    Zone(
        id="ARU-AGRICOLA",
        name="Zona Agrícola",
        city=City.ARAURE,
        center=(9.5600, -69.2500),
        radius_km=3.0,
        zone_type=ZoneType.RURAL,
        landmarks=(
            "Fincas", "Haciendas", "Zona ganadera",
            "Campos de cultivo",
        ),
    ),
    Zone(
        id="VIA-ACG-ARU",
        name="Vía Acarigua-Araure",
        city=City.BOTH,
        center=(9.5678, -69.2162),
        radius_km=0.5,
        zone_type=ZoneType.TRANSPORT,
        landmarks=(
            "Carretera Nacional Acarigua-Araure",
            "Llano Mall",
            "Estadio José Antonio Páez",
            "Estaciones de servicio",
        ),
    ),
]

# Midpoint between Acarigua and Araure, used by dashboards as the map origin.
DEFAULT_MAP_CENTER: Dict[str, float] = {
    "lat": 9.5678,
    "lng": -69.2162,
    "zoom": 13,
}

MAP_BOUNDS: Dict[str, float] = {
    "north": 9.6200,
    "south": 9.5200,
    "east": -69.1500,
    "west": -69.2700,
}
