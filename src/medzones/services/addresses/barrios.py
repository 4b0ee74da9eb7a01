"""Neighborhood (barrio) inference from free-text Buenos Aires addresses."""

from __future__ import annotations

from collections import Counter
from typing import Any, Optional, Sequence

from ...models.domain import LocatableRecord, NeighborhoodLabel

CAPITAL_OTHER = "Capital Federal (Otros)"
GREATER_BUENOS_AIRES_OTHER = "GBA (Otros)"
OTHER = "Otros"

# Order matters: entries listed first win when a keyword appears in several barrios.
BARRIOS_MAPPING: tuple[tuple[NeighborhoodLabel, tuple[str, ...]], ...] = (
    # Capital Federal - Norte
    ("Palermo", (
        "Palermo", "Av. Santa Fe", "Av. Las Heras", "Av. Córdoba", "Thames", "Gorriti",
        "Honduras", "Guatemala", "El Salvador", "Niceto Vega", "Humboldt", "Scalabrini Ortiz",
    )),
    ("Recoleta", (
        "Recoleta", "Av. Callao", "Av. Pueyrredón", "Ayacucho", "Junín", "French",
        "Juncal", "Arenales", "Santa Fe",
    )),
    ("Belgrano", (
        "Belgrano", "Av. Cabildo", "Juramento", "Congreso", "Monroe", "Cuba",
        "Echeverría", "Sucre", "Virrey Vértiz",
    )),
    ("Núñez", ("Núñez", "Av. del Libertador", "Amenábar", "Moldes", "Vuelta de Obligado")),
    ("Villa Urquiza", ("Villa Urquiza", "Av. Triunvirato", "Monroe", "Bauness", "Holmberg")),
    ("Coghlan", ("Coghlan", "Teodoro García", "Freire", "Olleros")),
    ("Saavedra", ("Saavedra", "García del Río", "Paroissien", "Ramsay")),
    # Capital Federal - Centro
    ("Centro / Microcentro", (
        "Centro", "Microcentro", "Av. Corrientes", "Av. 9 de Julio", "Florida", "Lavalle",
        "Maipú", "San Martín", "Reconquista", "Esmeralda", "Suipacha", "Carlos Pellegrini",
        "Bartolomé Mitre", "Tucumán", "Viamonte", "Córdoba", "Paraguay", "Marcelo T. de Alvear",
        "Arenales", "Santa Fe", "Presidente Perón", "Av. de Mayo", "Rivadavia",
        "Hipólito Yrigoyen", "Estados Unidos", "Venezuela", "México", "Chile",
        "Independencia", "Moreno", "Alsina", "Diagonal Norte", "Diagonal Sur",
    )),
    ("Puerto Madero", (
        "Puerto Madero", "Dique", "Juana Manso", "Pierina Dealessi", "Rosario Vera Peñaloza",
    )),
    ("Retiro", (
        "Retiro", "Av. del Libertador", "Av. Antártida Argentina", "Av. Ramos Mejía",
        "San Martín", "Maipú", "Florida",
    )),
    ("San Nicolás", (
        "San Nicolás", "Av. Corrientes", "Uruguay", "Paraná", "Montevideo", "Rodríguez Peña",
    )),
    # Capital Federal - Sur
    ("San Telmo", (
        "San Telmo", "Defensa", "Bolívar", "Piedras", "Tacuarí", "Paseo Colón",
        "Carlos Calvo", "Estados Unidos", "Independencia",
    )),
    ("La Boca", ("La Boca", "Caminito", "Almirante Brown", "Brandsen", "Suárez", "Olavarría")),
    ("Barracas", ("Barracas", "Montes de Oca", "California", "Lafayette", "Av. Caseros")),
    ("Constitución", ("Constitución", "Lima", "Salta", "Santiago del Estero", "Av. Juan de Garay")),
    ("Montserrat", ("Montserrat", "Av. de Mayo", "Bolívar", "Defensa", "Perú", "Chacabuco")),
    # Capital Federal - Oeste
    ("Caballito", (
        "Caballito", "Av. Rivadavia", "Av. Acoyte", "Av. Directorio", "Av. José María Moreno",
        "Primera Junta", "Emilio Mitre", "Avellaneda", "Yerbal", "Rojas",
    )),
    ("Almagro", (
        "Almagro", "Av. Corrientes", "Av. Estado de Israel", "Av. Medrano", "Bulnes",
        "Gascón", "Anchorena", "Jean Jaurès",
    )),
    ("Balvanera", (
        "Balvanera", "Once", "Av. Pueyrredón", "Av. Callao", "Larrea", "Uriburu",
        "Pasteur", "Alberti", "Pichincha",
    )),
    ("Villa Crespo", (
        "Villa Crespo", "Av. Corrientes", "Av. Warnes", "Murillo", "Camargo", "Padilla",
        "Vera", "Loyola", "Acevedo",
    )),
    ("Flores", (
        "Flores", "Av. Rivadavia", "Av. Nazca", "Av. Avellaneda", "Av. Directorio",
        "Membrillar", "Artigas", "Boyacá", "Yerbal",
    )),
    ("Floresta", ("Floresta", "Av. Avellaneda", "Av. Directorio", "Segurola", "Bahía Blanca")),
    ("Villa Luro", ("Villa Luro", "Av. Rivadavia", "Av. General Paz", "Lope de Vega", "Zelada")),
    # Zona Norte - GBA
    ("Vicente López", (
        "Vicente López", "Olivos", "La Lucila", "Munro", "Villa Adelina", "Villa Martelli",
        "Av. Maipú", "Av. del Libertador",
    )),
    ("San Isidro", ("San Isidro", "Martínez", "Acassuso", "San Isidro Centro", "Av. del Libertador")),
    ("Tigre", (
        "Tigre", "Don Torcuato", "El Talar", "General Pacheco", "Benavídez", "Rincón de Milberg",
    )),
    ("San Fernando", ("San Fernando", "Victoria", "Virreyes", "Av. Pte. Perón")),
    ("Escobar", ("Escobar", "Ingeniero Maschwitz", "Matheu", "Maquinista Savio")),
    # Zona Oeste - GBA
    ("Morón", ("Morón", "Castelar", "Ituzaingó", "Villa Sarmiento", "El Palomar", "Haedo")),
    ("Tres de Febrero", (
        "Caseros", "Churruca", "Ciudadela", "Loma Hermosa", "Martín Coronado", "Pablo Podestá",
        "Villa Bosch", "Villa Raffo", "Santos Lugares",
    )),
    ("Hurlingham", ("Hurlingham", "Villa Tesei", "William C. Morris")),
    ("San Miguel", ("San Miguel", "Bella Vista", "Campo de Mayo", "Muñiz", "Santa María")),
    ("Malvinas Argentinas", (
        "Grand Bourg", "Los Polvorines", "Pablo Nogués", "Tortuguitas", "Villa de Mayo",
    )),
    # Zona Sur - GBA
    ("Avellaneda", ("Avellaneda", "Dock Sud", "Piñeyro", "Villa Domínico", "Gerli", "Crucecita")),
    ("Quilmes", (
        "Quilmes", "Bernal", "Don Bosco", "Ezpeleta", "Villa La Florida", "San Francisco Solano",
    )),
    ("Berazategui", ("Berazategui", "Ranelagh", "Sourigues", "Villa España", "Hudson", "Pereyra")),
    ("Florencio Varela", (
        "Florencio Varela", "Bosques", "Gobernador Costa", "Villa San Luis", "Villa Vatteone",
    )),
    ("Lanús", ("Lanús Este", "Lanús Oeste", "Remedios de Escalada", "Monte Chingolo", "Villa Caraza")),
    ("Lomas de Zamora", (
        "Lomas de Zamora", "Banfield", "Llavallol", "Temperley", "Turdera", "Villa Fiorito",
    )),
)

CAPITAL_MARKERS = (
    "ciudad autónoma de buenos aires",
    "cdad. autónoma de buenos aires",
    "capital federal",
)

PROVINCE_OF_BUENOS_AIRES_MARKERS = (
    "provincia de buenos aires",
    "pcia. de buenos aires",
    "buenos aires, argentina",
)

PROVINCES = (
    "córdoba", "santa fe", "mendoza", "tucumán", "entre ríos", "corrientes",
    "misiones", "salta", "chaco", "santiago del estero", "san juan", "jujuy",
    "río negro", "formosa", "neuquén", "chubut", "san luis", "catamarca",
    "la rioja", "la pampa", "santa cruz", "tierra del fuego",
)

# Lowercased once; matching is plain substring search without accent folding.
_NORMALIZED_MAPPING: tuple[tuple[NeighborhoodLabel, tuple[str, ...]], ...] = tuple(
    (barrio, tuple(keyword.lower() for keyword in keywords)) for barrio, keywords in BARRIOS_MAPPING
)


def classify_address(address: Any) -> NeighborhoodLabel:
    """Return the best-guess neighborhood label for a free-text address.

    Falls back from the barrio keyword table to city and province markers and
    finally to ``"Otros"``. Never raises.
    """

    if not address or not isinstance(address, str):
        return OTHER

    normalized = address.lower()

    for barrio, keywords in _NORMALIZED_MAPPING:
        for keyword in keywords:
            if keyword in normalized:
                return barrio

    if any(marker in normalized for marker in CAPITAL_MARKERS):
        return CAPITAL_OTHER

    if any(marker in normalized for marker in PROVINCE_OF_BUENOS_AIRES_MARKERS):
        return GREATER_BUENOS_AIRES_OTHER

    for province in PROVINCES:
        if province in normalized:
            return f"{province[0].upper()}{province[1:]} (Provincia)"

    return OTHER


def neighborhood_labels() -> tuple[NeighborhoodLabel, ...]:
    """Canonical barrio names in table order."""

    return tuple(barrio for barrio, _ in BARRIOS_MAPPING)


def group_records_by_neighborhood(records: Sequence[LocatableRecord]) -> list[dict]:
    """Group records by inferred neighborhood, most populated first."""

    counts: Counter[str] = Counter()
    addresses: dict[str, dict[str, None]] = {}
    for record in records:
        barrio = classify_address(record.address)
        counts[barrio] += 1
        bucket = addresses.setdefault(barrio, {})
        if record.address:
            bucket[record.address] = None

    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [
        {"barrio": barrio, "count": count, "addresses": list(addresses[barrio])}
        for barrio, count in ordered
    ]


def filter_records_by_neighborhood(
    records: Sequence[LocatableRecord],
    barrio: Optional[str],
) -> list[LocatableRecord]:
    if not barrio:
        return list(records)
    return [record for record in records if classify_address(record.address) == barrio]


def neighborhood_filter_options(records: Sequence[LocatableRecord]) -> list[dict]:
    return [
        {"value": group["barrio"], "label": f"{group['barrio']} ({group['count']})", "count": group["count"]}
        for group in group_records_by_neighborhood(records)
    ]
