"""
Face embedding helpers.

- Canonical-length normalization (zero-pad / truncate) applied before any
  embedding is stored or compared.
- Cosine similarity and nearest-neighbour lookup (numpy).
- Embedding generation from a headshot image using DeepFace, used by bulk import.
"""
from typing import Any, Hashable, List, Optional, Sequence, Tuple
import logging

import numpy as np

logger = logging.getLogger(__name__)

# Model and detectors used for headshot images. Live embeddings come from the
# client-side detector and only need to share the canonical length.
DEFAULT_EMBEDDING_MODEL = "ArcFace"
HEADSHOT_DETECTOR_BACKENDS = ["retinaface", "mtcnn", "opencv"]


def normalize_embedding(values: Sequence[float], dimension: int) -> List[float]:
    """
    Return `values` as native floats with exactly `dimension` entries.
    Shorter vectors are zero-padded, longer ones truncated.
    """
    vector = [float(x) for x in values[:dimension]]
    if len(vector) < dimension:
        vector.extend([0.0] * (dimension - len(vector)))
    return vector


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity between two vectors. Range [-1, 1]; 0.0 for empty/zero vectors."""
    if len(a) != len(b) or len(a) == 0:
        return 0.0
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    na = float(np.linalg.norm(va))
    nb = float(np.linalg.norm(vb))
    if na == 0 or nb == 0:
        return 0.0
    return float(np.dot(va, vb) / (na * nb))


def find_nearest(
    query: Sequence[float],
    candidates: Sequence[Tuple[Hashable, Sequence[float]]],
) -> Optional[Tuple[Hashable, float]]:
    """
    Find the candidate closest to `query` by cosine similarity.

    Args:
        query: Query embedding
        candidates: (key, embedding) pairs; embeddings must share the query's length

    Returns:
        (key, similarity) of the best candidate with similarity clamped to [0, 1],
        or None when there is nothing comparable.
    """
    q = np.asarray(query, dtype=np.float64)
    q_norm = float(np.linalg.norm(q))
    if q.size == 0 or q_norm == 0:
        return None

    keys: List[Hashable] = []
    vectors: List[np.ndarray] = []
    for key, embedding in candidates:
        vector = np.asarray(embedding, dtype=np.float64)
        if vector.shape != q.shape:
            continue
        norm = float(np.linalg.norm(vector))
        if norm <= 1e-12:
            continue
        keys.append(key)
        vectors.append(vector / norm)

    if not vectors:
        return None

    scores = np.vstack(vectors) @ (q / q_norm)
    idx = int(np.argmax(scores))
    similarity = min(1.0, max(0.0, float(scores[idx])))
    return keys[idx], similarity


def compute_face_embedding(
    image_path: str,
    model_name: str = DEFAULT_EMBEDDING_MODEL,
) -> Optional[List[float]]:
    """
    Compute one face embedding for a headshot image. Tries several detectors
    (RetinaFace, MTCNN, OpenCV) and returns the embedding of the largest face.
    Returns None when no face could be detected with any detector.
    """
    from deepface import DeepFace

    last_error: Optional[Exception] = None
    for detector_backend in HEADSHOT_DETECTOR_BACKENDS:
        try:
            objs = DeepFace.represent(
                img_path=image_path,
                model_name=model_name,
                detector_backend=detector_backend,
                enforce_detection=False,
            )
        except Exception as e:
            last_error = e
            logger.debug("Headshot detector %s failed for %s: %s", detector_backend, image_path, e)
            continue

        best: Optional[Any] = None
        best_area = 0
        for obj in objs or []:
            emb = obj.get("embedding")
            area = obj.get("facial_area") or {}
            w, h = int(area.get("w", 0)), int(area.get("h", 0))
            if emb is not None and w * h > best_area:
                best_area = w * h
                best = emb
        if best is not None:
            return [float(x) for x in best]

    if last_error:
        logger.info("No face detected in %s (tried %s): %s", image_path, HEADSHOT_DETECTOR_BACKENDS, last_error)
    return None
