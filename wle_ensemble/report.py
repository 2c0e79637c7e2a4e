"""
Report rendering: accuracy table, confusion matrices, importance plots and
test-set predictions.
"""

from pathlib import Path
from typing import Dict, Any, List, Optional, Sequence

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns


def accuracy_table(
    results: Dict[str, Dict[str, Any]],
    cv_scores: Optional[Dict[str, List[float]]] = None
) -> pd.DataFrame:
    """One row per model (and the ensemble) with held-out and CV accuracy."""
    cv_scores = cv_scores or {}
    rows = []
    for name, result in results.items():
        scores = cv_scores.get(name)
        rows.append({
            'model': name,
            'accuracy': result['accuracy'],
            'out_of_sample_error': result['out_of_sample_error'],
            'cv_mean': float(np.mean(scores)) if scores else np.nan,
            'cv_std': float(np.std(scores)) if scores else np.nan,
        })
    return pd.DataFrame(rows, columns=['model', 'accuracy', 'out_of_sample_error', 'cv_mean', 'cv_std'])


def plot_feature_importance(
    importance_df: pd.DataFrame,
    path: Path,
    top_n: int = 20,
    title: Optional[str] = None
) -> Path:
    """Save a horizontal bar chart of the top features."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    top = importance_df.head(top_n)
    fig, ax = plt.subplots(figsize=(8, max(3, 0.3 * len(top) + 1)))
    sns.barplot(data=top, x='importance', y='feature', color="steelblue", ax=ax)
    ax.set_xlabel("Importance (scaled 0-100)")
    ax.set_ylabel("")
    if title:
        ax.set_title(title)
    fig.tight_layout()
    fig.savefig(path, dpi=100)
    plt.close(fig)

    return path


def write_predictions(ids: Sequence, labels: Sequence[str], path: Path, id_col: str = 'problem_id') -> Path:
    """Write test-set predictions as a two-column CSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame({id_col: list(ids), 'classe': list(labels)}).to_csv(path, index=False)
    print(f"✓ Predictions saved to {path}")
    return path


def write_answer_files(ids: Sequence, labels: Sequence[str], out_dir: Path) -> List[Path]:
    """Write one problem_id_<id>.txt file per test row holding its predicted label."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for problem_id, label in zip(ids, labels):
        path = out_dir / f"problem_id_{problem_id}.txt"
        with open(path, 'w') as f:
            f.write(str(label))
        paths.append(path)

    print(f"✓ Wrote {len(paths)} answer files to {out_dir}")
    return paths


def _markdown_table(df: pd.DataFrame) -> str:
    return df.to_markdown(index=False, floatfmt=".4f")


def render_report(
    path: Path,
    accuracy_df: pd.DataFrame,
    results: Dict[str, Dict[str, Any]],
    weights: Dict[str, float],
    importance_plots: Optional[Dict[str, Path]] = None,
    dropped_columns: Optional[List[str]] = None
) -> Path:
    """Render the analysis report as Markdown."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    importance_plots = importance_plots or {}

    sections = ["# Weight Lifting Exercise classification", ""]

    sections += ["## Model accuracy (validation partition)", "", _markdown_table(accuracy_df), ""]

    weight_df = pd.DataFrame({'model': list(weights), 'weight': list(weights.values())})
    sections += ["## Voting weights", "", _markdown_table(weight_df), ""]

    if dropped_columns:
        sections += [
            "## Correlated columns removed",
            "",
            ", ".join(f"`{col}`" for col in dropped_columns),
            "",
        ]

    sections += ["## Confusion matrices", ""]
    for name, result in results.items():
        matrix = result['confusion_matrix'].reset_index()
        sections += [f"### {name}", "", _markdown_table(matrix), ""]

    if importance_plots:
        sections += ["## Variable importance", ""]
        for name, plot_path in importance_plots.items():
            rel = Path(plot_path)
            try:
                rel = rel.relative_to(path.parent)
            except ValueError:
                pass
            sections += [f"### {name}", "", f"![{name} importance]({rel.as_posix()})", ""]

    with open(path, 'w') as f:
        f.write("\n".join(sections))

    print(f"✓ Report saved to {path}")
    return path
