"""
Recommendation layer (Recipe Ranker)

This package ranks normalized recipes for one user by combining:
  - Layer-0 IR baseline (TF-IDF relevance of an explicit or context query)
  - Personalization signals (pantry ingredients, preferences, context, nutrition)
  - Hard filters before scoring and history-based post filters after
  - Rule-based explanation strings for every ranked recipe

Ranking logic stays decoupled from ingestion/normalization and from user
data storage: it consumes NormalizedRecipe objects and a UserSnapshot.
"""
