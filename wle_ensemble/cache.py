from pathlib import Path
from typing import Any, Callable, Optional, Union

import joblib


def load_or_compute(
    path: Optional[Union[str, Path]],
    compute: Callable[[], Any]
) -> Any:
    """
    Return the object stored at path, or compute it and store it there.

    Passing path=None disables caching and always calls compute.
    """
    if path is None:
        return compute()

    path = Path(path)
    if path.exists():
        print(f"✓ Loaded cached artifact from {path}")
        return joblib.load(path)

    result = compute()
    path.parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(result, path)
    print(f"✓ Cached artifact to {path}")
    return result
