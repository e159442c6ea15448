"""Context element synthesis for the library catalog.

A library declares ``contextCount`` elements but only the explicitly created
ones are stored. Reads pad the stored list up to ``contextCount`` with filler
elements whose title/category come from fixed tables, offset by a checksum of
the library id so an untouched library keeps the same titles across reads.
Filler descriptions (Faker lorem text) and ids are random on every read.
"""

from __future__ import annotations

from typing import Iterable

from faker import Faker

from .state import Library, LibraryElement
from .versioning import id_checksum, new_id


CATEGORIES: tuple[str, ...] = (
    "Best Practice",
    "Documentation",
    "Example",
    "Tutorial",
    "Reference",
    "Guide",
)

TITLES: tuple[str, ...] = (
    "Introducción a conceptos fundamentales",
    "Patrones y arquitecturas comunes",
    "Casos de uso avanzados",
    "Integración con sistemas externos",
    "Optimización y rendimiento",
    "Debugging y troubleshooting",
    "Configuración inicial",
    "Mejores prácticas",
    "Solución de problemas",
    "Casos de éxito",
)

fake = Faker()


def lorem_sentences(count: int = 2, faker: Faker | None = None) -> str:
    return " ".join((faker or fake).sentences(nb=count))


def random_category(faker: Faker | None = None) -> str:
    return (faker or fake).random_element(CATEGORIES)


def synthetic_title(library_id: str, index: int) -> str:
    offset = id_checksum(library_id) % len(TITLES)
    return TITLES[(index + offset) % len(TITLES)]


def synthetic_category(library_id: str, index: int) -> str:
    offset = id_checksum(library_id) % len(CATEGORIES)
    return CATEGORIES[(index + offset) % len(CATEGORIES)]


def synthesize_element(library_id: str, index: int, faker: Faker | None = None) -> LibraryElement:
    return LibraryElement(
        id=new_id(),
        title=synthetic_title(library_id, index),
        category=synthetic_category(library_id, index),
        description=lorem_sentences(2, faker),
    )


def materialize_elements(
    library: Library,
    stored: Iterable[LibraryElement],
    faker: Faker | None = None,
) -> list[LibraryElement]:
    """Stored elements followed by filler for indices ``[len(stored), contextCount)``."""

    elements = list(stored)
    for index in range(len(elements), library.context_count):
        elements.append(synthesize_element(library.id, index, faker))
    return elements


def element_matches(element: LibraryElement, needle: str) -> bool:
    """``needle`` must already be lowercased and trimmed."""

    return needle in element.title.lower() or needle in element.description.lower()


def filter_elements(elements: Iterable[LibraryElement], needle: str) -> list[LibraryElement]:
    if not needle:
        return list(elements)
    return [el for el in elements if element_matches(el, needle)]


def library_matches(
    library: Library,
    stored: Iterable[LibraryElement],
    needle: str,
    faker: Faker | None = None,
) -> bool:
    """Title match, or any materialized element matching the search text.

    Filler descriptions are generated just for the test and then dropped.
    """

    if not needle or needle in library.title.lower():
        return True
    return any(element_matches(el, needle) for el in materialize_elements(library, stored, faker))


def normalize_search(value: str | None) -> str:
    return (value or "").lower().strip()
