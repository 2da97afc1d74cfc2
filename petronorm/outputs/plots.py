"""Optional plotting helpers."""

from typing import List, Optional

from ..batch import NormResult
from ..data.minerals import MINERAL_LIBRARY


def mean_norm(results: List[NormResult]) -> List[float]:
    assemblages = [result.assemblage for result in results if result.assemblage is not None]
    if not assemblages:
        return [0.0] * len(MINERAL_LIBRARY)
    return [
        sum(getattr(assemblage, name) for assemblage in assemblages) / len(assemblages)
        for name in MINERAL_LIBRARY
    ]


def plot_mean_norm(results: List[NormResult], path: Optional[str] = None) -> None:
    try:
        import matplotlib.pyplot as plt
    except ImportError as exc:
        raise ImportError("matplotlib is required for plotting.") from exc

    labels = [mineral.abbreviation for mineral in MINERAL_LIBRARY.values()]
    values = mean_norm(results)

    fig, ax = plt.subplots(figsize=(7.0, 4.0))
    ax.bar(labels, values, color="#4C72B0")
    ax.set_xlabel("Normative mineral")
    ax.set_ylabel("Mean abundance (wt%)")
    ax.set_title("Mean CIPW norm")
    fig.tight_layout()

    if path:
        fig.savefig(path, dpi=150)
        plt.close(fig)
    else:
        plt.show()
