from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class SamplerParams:
    bound: int = 12345
    count: int = 10
    samples: int = 1_000_000
    bins: int = 0
    significance: float = 0.01
    seed: int | None = None
    source: str = "numpy"
    method: str = "lemire"
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: dict) -> "SamplerParams":
        params = cls()
        params.bound = int(mapping.get("range", mapping.get("bound", params.bound)))
        params.count = int(mapping.get("count", params.count))
        params.samples = int(mapping.get("sampleCount", mapping.get("samples", params.samples)))
        params.bins = int(mapping.get("bins", params.bins))
        params.significance = float(mapping.get("significance", params.significance))
        if "seed" in mapping and mapping["seed"] is not None:
            params.seed = int(mapping["seed"])
        params.source = str(mapping.get("source", params.source))
        params.method = str(mapping.get("method", params.method))
        params.extra = dict(mapping)
        return params
