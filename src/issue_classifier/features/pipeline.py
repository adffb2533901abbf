"""
Feature pipeline construction.

Declares the fixed featurization chain applied to every issue:

    1. Area         -> Label                  (label key, see modeling.labels)
    2. Title        -> TitleFeaturized        (text featurizer)
    3. Description  -> DescriptionFeaturized  (independent text featurizer)
    4. both vectors -> Features               (concatenation)
    5. cache checkpoint before the trainer    (joblib.Memory)

The step names below are fixed identifiers. Trainers are appended after
the Features step and the evaluator reads Label/PredictedLabel by name.
"""

from pathlib import Path

from joblib import Memory
from sklearn.compose import ColumnTransformer
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.pipeline import FeatureUnion, Pipeline

from issue_classifier.config.settings import ClassifierConfig, FeaturizationConfig
from issue_classifier.schemas.issue import DESCRIPTION_COLUMN, TITLE_COLUMN
from issue_classifier.utils.logging import get_logger

log = get_logger(__name__)

LABEL_COLUMN = "Label"
FEATURES_COLUMN = "Features"
TITLE_FEATURIZED = "TitleFeaturized"
DESCRIPTION_FEATURIZED = "DescriptionFeaturized"
PREDICTED_LABEL_COLUMN = "PredictedLabel"


def build_text_featurizer(config: FeaturizationConfig) -> FeatureUnion:
    """
    Build a text-to-vector featurizer for one text column.

    Word n-grams and character n-grams are extracted separately and
    TF-IDF weighted, each block L2-normalized, then stacked.

    Args:
        config: Featurization configuration.

    Returns:
        Unfitted FeatureUnion.
    """
    word_ngrams = TfidfVectorizer(
        analyzer="word",
        ngram_range=config.word_ngram_range,
        lowercase=config.lowercase,
        sublinear_tf=config.sublinear_tf,
        min_df=config.min_df,
        norm="l2",
    )
    char_ngrams = TfidfVectorizer(
        analyzer="char_wb",
        ngram_range=config.char_ngram_range,
        lowercase=config.lowercase,
        sublinear_tf=config.sublinear_tf,
        min_df=config.min_df,
        norm="l2",
    )
    return FeatureUnion(
        transformer_list=[
            ("word_ngrams", word_ngrams),
            ("char_ngrams", char_ngrams),
        ]
    )


def build_feature_pipeline(
    config: ClassifierConfig,
    *,
    cache_dir: Path | None = None,
) -> Pipeline:
    """
    Build the featurization pipeline (without a trainer).

    Each text column is featurized independently and the results are
    concatenated into a single sparse Features matrix. When caching is
    enabled the fitted featurization is memoized in cache_dir, so repeated
    fits on the same table skip the text passes.

    Args:
        config: Classifier configuration.
        cache_dir: Override for the cache location (default: config.cache_dir).

    Returns:
        Unfitted Pipeline with a single Features step.
    """
    featurize = ColumnTransformer(
        transformers=[
            (TITLE_FEATURIZED, build_text_featurizer(config.featurization), TITLE_COLUMN),
            (
                DESCRIPTION_FEATURIZED,
                build_text_featurizer(config.featurization),
                DESCRIPTION_COLUMN,
            ),
        ],
        remainder="drop",
        sparse_threshold=1.0,
    )

    memory: Memory | None = None
    if config.training.cache:
        location = cache_dir if cache_dir is not None else config.cache_dir
        memory = Memory(location=str(location), verbose=0)

    log.debug(
        "Built feature pipeline",
        columns=[TITLE_COLUMN, DESCRIPTION_COLUMN],
        cached=memory is not None,
    )
    return Pipeline(steps=[(FEATURES_COLUMN, featurize)], memory=memory)
