"""In-memory state store for the mock server.

Holds the library catalog, stored context elements, organizations,
memberships and fabricated users for the lifetime of one app instance.
Nothing is persisted; a new store starts from the seed fixtures.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from threading import RLock
from typing import Any

from .versioning import new_id, now_utc_iso


JsonObject = dict[str, Any]

ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"


@dataclass(slots=True)
class LibraryElement:
    id: str
    title: str
    category: str
    description: str

    def to_dict(self) -> JsonObject:
        return asdict(self)


@dataclass(slots=True)
class Library:
    id: str
    title: str
    context_count: int
    organization_id: str

    def to_dict(self) -> JsonObject:
        return {"id": self.id, "title": self.title, "contextCount": self.context_count}


@dataclass(slots=True)
class Organization:
    id: str
    name: str
    owner_id: str
    description: str = ""
    created_at: str = field(default_factory=now_utc_iso)

    def to_dict(self) -> JsonObject:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "owner_id": self.owner_id,
            "created_at": self.created_at,
        }


@dataclass(slots=True)
class OrganizationUser:
    user_id: str
    organization_id: str
    role: str = ROLE_MEMBER
    added_at: str = field(default_factory=now_utc_iso)


@dataclass(slots=True)
class User:
    user_id: str
    email: str
    name: str

    def to_dict(self) -> JsonObject:
        return asdict(self)


# Seed fixtures: (id, title, contextCount) per organization.
ORG001_LIBRARIES: tuple[tuple[str, str, int], ...] = (
    ("lib-org001-001", "Code Review Guidelines", 6),
    ("lib-org001-002", "Microservices Architecture", 14),
    ("lib-org001-003", "Cloud Deployment", 11),
    ("lib-org001-004", "DevOps Best Practices", 13),
    ("lib-org001-005", "Monitoring and Logging", 10),
    ("lib-org001-006", "Authentication & Authorization", 12),
    ("lib-org001-007", "Database Design", 15),
    ("lib-org001-008", "Frontend Optimization", 9),
    ("lib-org001-009", "API Security", 8),
    ("lib-org001-010", "Testing Frameworks", 11),
    ("lib-org001-011", "CI/CD Pipelines", 13),
    ("lib-org001-012", "Documentation Standards", 7),
)

ORG002_LIBRARIES: tuple[tuple[str, str, int], ...] = (
    ("lib-org002-001", "React Patterns", 8),
    ("lib-org002-002", "TypeScript Best Practices", 12),
    ("lib-org002-003", "API Design Guide", 10),
    ("lib-org002-004", "Database Optimization", 15),
    ("lib-org002-005", "Testing Strategies", 9),
    ("lib-org002-006", "Security Standards", 11),
    ("lib-org002-007", "Performance Tuning", 7),
)

SEED_LIBRARIES: dict[str, tuple[tuple[str, str, int], ...]] = {
    "org-001": ORG001_LIBRARIES,
    "org-002": ORG002_LIBRARIES,
}

SEED_ORGANIZATIONS: tuple[JsonObject, ...] = (
    {
        "id": "org-001",
        "name": "Acme Corporation",
        "description": "Empresa líder en soluciones tecnológicas innovadoras",
        "owner_id": "user-001",
        "created_at": "2024-01-15T10:30:00.000Z",
    },
    {
        "id": "org-002",
        "name": "StartupX Labs",
        "description": "Laboratorio de innovación y desarrollo de productos digitales",
        "owner_id": "user-002",
        "created_at": "2024-03-22T14:45:00.000Z",
    },
)


class MockStateStore:
    """Thread-safe in-memory store."""

    def __init__(self, *, seed: bool = True) -> None:
        self._lock = RLock()
        self._global_revision = 0

        self.libraries: dict[str, Library] = {}
        self.library_elements: dict[str, list[LibraryElement]] = {}
        self.organizations: dict[str, Organization] = {}
        self.organization_users: dict[str, list[OrganizationUser]] = {}
        self.users: dict[str, User] = {}

        if seed:
            self._seed()

    def _seed(self) -> None:
        for org_id, rows in SEED_LIBRARIES.items():
            for library_id, title, count in rows:
                self.libraries[library_id] = Library(
                    id=library_id,
                    title=title,
                    context_count=count,
                    organization_id=org_id,
                )
        for row in SEED_ORGANIZATIONS:
            self.organizations[row["id"]] = Organization(**row)

    def _bump_global(self) -> int:
        self._global_revision += 1
        return self._global_revision

    @property
    def global_revision(self) -> int:
        return self._global_revision

    # -- libraries ---------------------------------------------------------

    def get_library(self, library_id: str) -> Library | None:
        return self.libraries.get(library_id)

    def libraries_for_org(self, org_id: str) -> list[Library]:
        """Libraries owned by ``org_id`` in seed order."""

        return [lib for lib in self.libraries.values() if lib.organization_id == org_id]

    def stored_elements(self, library_id: str) -> list[LibraryElement]:
        return list(self.library_elements.get(library_id, ()))

    def add_element(self, library: Library, element: LibraryElement) -> int:
        """Store ``element`` and bump the library's contextCount; returns the new count."""

        with self._lock:
            self.library_elements.setdefault(library.id, []).append(element)
            library.context_count += 1
            self._bump_global()
            return library.context_count

    # -- organizations -----------------------------------------------------

    def create_organization(self, *, name: str, owner_id: str, description: str = "") -> Organization:
        with self._lock:
            org = Organization(id=new_id(), name=name, owner_id=owner_id, description=description)
            self.organizations[org.id] = org
            self.organization_users[org.id] = [
                OrganizationUser(user_id=owner_id, organization_id=org.id, role=ROLE_ADMIN)
            ]
            self._bump_global()
            return org

    def list_organizations(self) -> list[Organization]:
        return list(self.organizations.values())

    def members(self, org_id: str) -> list[OrganizationUser]:
        return list(self.organization_users.get(org_id, ()))

    def find_member(self, org_id: str, user_id: str) -> OrganizationUser | None:
        for member in self.organization_users.get(org_id, ()):
            if member.user_id == user_id:
                return member
        return None

    def add_member(self, org_id: str, user_id: str, role: str) -> OrganizationUser | None:
        """Add a membership row; returns None when the user is already a member."""

        with self._lock:
            if self.find_member(org_id, user_id) is not None:
                return None
            member = OrganizationUser(
                user_id=user_id,
                organization_id=org_id,
                role=ROLE_ADMIN if role == ROLE_ADMIN else ROLE_MEMBER,
            )
            self.organization_users.setdefault(org_id, []).append(member)
            self._bump_global()
            return member

    def remove_member(self, org_id: str, user_id: str) -> bool:
        with self._lock:
            rows = self.organization_users.get(org_id, [])
            for index, member in enumerate(rows):
                if member.user_id == user_id:
                    del rows[index]
                    self._bump_global()
                    return True
            return False

    # -- users -------------------------------------------------------------

    def remember_user(self, user: User) -> User:
        with self._lock:
            self.users.setdefault(user.user_id, user)
            return self.users[user.user_id]
