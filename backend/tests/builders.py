"""Test builders — compact snapshot construction and a deterministic IdGenerator."""

from studbook.core.records import PartitionSnapshot, Project, Species, Individual


class SequentialIdGenerator:
    """IdGenerator producing <prefix>-new-1, <prefix>-new-2, ... and logging calls."""

    def __init__(self):
        self.calls: list[str] = []

    def __call__(self, prefix: str) -> str:
        self.calls.append(prefix)
        return f"{prefix}-new-{len(self.calls)}"


def project(pid: str, name: str | None = None) -> Project:
    return Project(id=pid, name=name or f"Project {pid}")


def species(sid: str, pid: str, scientific_name: str, **attributes) -> Species:
    return Species(
        id=sid, project_id=pid, scientific_name=scientific_name,
        common_name=attributes.pop("common_name", ""), attributes=attributes,
    )


def individual(iid: str, pid: str, sid: str, name: str = "") -> Individual:
    return Individual(id=iid, project_id=pid, species_id=sid, name=name or iid)


def lion_snapshot() -> PartitionSnapshot:
    """Project A holds S1 'Panthera leo' with I1, I2; Project B is empty."""
    return PartitionSnapshot.of(
        [project("A"), project("B")],
        [species("S1", "A", "Panthera leo", common_name="Lion", iucn="VU")],
        [individual("I1", "A", "S1"), individual("I2", "A", "S1")],
    )
