# releval

Evaluation measures for ranked retrieval results. Each measure takes the
per-topic relevance picture of a ranking and returns a score. The package
needs nothing outside the standard library.

## Installing

```
pip install .
```

## Input

Most measures take a `ResRels` from `releval.relevance`, a frozen record of
one topic's ranking:

- `results_rel_list`: the relevance value of each retrieved document, in
  rank order (`num_ret` is its length);
- `num_rel` and `num_rel_ret`: relevant documents, and relevant documents
  retrieved;
- `rel_levels`: `rel_levels[i]` is the number of documents judged at
  relevance level `i`;
- `num_nonpool` and `num_unjudged_in_pool`.

In `results_rel_list` a document outside the judgment pool has the value
`releval.bpref.RELVALUE_NONPOOL` (-1), and a pooled but unjudged one
`releval.bpref.RELVALUE_UNJUDGED` (-2).

Measures averaged over judgment groups (several users judging the same
topic) take a `ResRelsJg`, whose `jgs` holds one `ResRels` per group. The
preference measures take a `ResultsPrefs` from `releval.prefs`, built from
`JudgmentGroup` records whose preferences are given either as
`EquivalenceClass` lists or as a square preference array.

```python
from releval.relevance import ResRels
from releval.average_precision import average_precision
from releval.precision import precision_at

rr = ResRels(results_rel_list=[1, 0, 1, 0], num_rel=3, num_rel_ret=2,
             rel_levels=[5, 3])
average_precision(rr, relevance_level=1)   # (1/1 + 2/3) / 3
precision_at(rr, 1, [2, 10])               # {2: 0.5, 10: 0.2}
```

## Measures

| Module | Functions |
| --- | --- |
| `releval.relevance` | `num_ret`, `num_rel_ret`, `num_rel`, `num_nonrel_judged_ret`, `num_q_average`, `num_rel_average` |
| `releval.average_precision` | `average_precision`, `average_precision_avgjg`, `gm_average_precision`, `map_cut`, `binary_g` |
| `releval.precision` | `precision_at`, `precision_at_avgjg`, `r_precision`, `rprec_mult`, `rprec_mult_avgjg` |
| `releval.interpolated` | `iprec_at_recall`, `eleven_pt_avg` |
| `releval.bpref` | `bpref`, `gm_bpref`, `inferred_ap` |
| `releval.gains` | `ndcg`, `ndcg_cut`, `ndcg_p`, `setup_gains` |
| `releval.prefs` | `prefs_avgjg`, `prefs_avgjg_imp`, `prefs_avgjg_ret`, `prefs_avgjg_rnonrel`, `prefs_avgjg_rnonrel_ret` |

A document counts as relevant when its relevance value is at least
`relevance_level` (normally 1).

Measures with cutoffs return a dict from cutoff to value, in increasing
cutoff order. `precision_at`, `precision_at_avgjg`, `map_cut` and
`ndcg_cut` take document counts, which must be positive and distinct.
`rprec_mult`, `rprec_mult_avgjg`, `iprec_at_recall` and `eleven_pt_avg`
take fractions of the number of relevant documents; the last two default to
`releval.interpolated.DEFAULT_RECALL_POINTS`, the eleven points 0.0 to 1.0.
An empty or duplicated cutoff list raises `ValueError`.

`ndcg` and `ndcg_p` take `gain_params`, a mapping (or sequence of pairs)
from relevance level to gain; levels without an entry keep their own level
number as their gain. `ndcg_cut` always uses the relevance values as gains.
`setup_gains` returns the resulting `Gains`, sorted by increasing gain.

`gm_average_precision` and `gm_bpref` return the natural logarithm of the
per-topic score, floored at `releval.average_precision.MIN_GEO_MEAN`, ready
to be averaged across topics and exponentiated.

`num_rel_average` recounts relevant judgments over `RelInfo` records when
asked to average over all judged topics; a `RelInfo` whose format is
neither `"qrels"` nor `"qrels_jg"` raises `UnknownRelFormatError`.

## Z-score reference files

`releval.zscores` reads files of whitespace-separated lines

```
qid  measure_name  mean  stddev
```

`read_zscores(path)` reads a file and `parse_zscores(text)` parses a
string. Both return a dict from query id (in sorted order) to a tuple of
`ZScore` records sorted by measure name. Empty input, or a line without
exactly four fields, raises `ZScoreFormatError`; for a bad line its `line`
attribute holds the line number.

## What the package does not do

- It does not read qrels or run files, and does not build `ResRels`,
  `ResRelsJg` or `ResultsPrefs` from them; callers construct these records.
- It has no command-line program and does not print reports.
- It does not average scores over topics; each function scores one topic.
- The gain measures G, Rndcg and ndcg_rel are not provided.

## Running the tests

```
pip install .[test]
pytest
```