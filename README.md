# tetrolab

Tools around a falling-block puzzle game: reading and writing the JSON files
of captured board sessions, trained models and normalization parameters;
censoring reports that show how unfinished games skew survival averages;
an adaptive sampler that balances easy and hard board captures; the phase
schedule for genetic training; and building blocks for a terminal display.

The package needs nothing beyond the Python standard library (3.10 or later).

## Installation

```
pip install .
```

For running the test suite:

```
pip install .[test]
pytest
```

## Command line

Installing the package provides the `tetrolab` command with one
sub-command:

```
tetrolab analyze-censoring data/boards.json
```

It loads a boards file and prints three reports: overall complete versus
censored sessions, censoring by capture phase (the turn range split into four
equal phases), and censoring and mean survival per placement evaluator. A
missing, malformed or empty boards file is reported on standard error and the
command exits with status 1.

## Library overview

- `tetrolab.data` – the JSON data model: `SessionCollection`, `SessionData`,
  `BoardAndPlacement` (board and placement are kept as their JSON
  documents), trained `Model` files (timestamps in UTC), and the
  normalization parameters `NormalizationParams`, `FeatureNormalization`,
  `NormalizationRange` and `NormalizationStats`. Each document class has
  `from_dict` and `to_dict`. `load_session_collection`, `load_model` and
  `save_normalization_params` read and write files; malformed data raises
  `DataError`, and a boards file with no sessions is rejected.
  `FeatureNormalization.transform_and_normalize` maps a raw feature value to
  its KM median (the worst case for unknown values) and then onto 0..1.
- `tetrolab.censoring` – report lines from sessions
  (`overall_censoring_report`, `capture_phase_report`, `evaluator_report`),
  a table row for one feature value (`feature_value_row`, flagging a bias
  above 1.5 with ⚠), selection of the P0/P25/P50/P75/P100 rows by board
  count (`select_percentile_indices`), and `robust_normalization`, which
  builds a P05–P95 `FeatureNormalization` from
  `(raw value, KM median, board count)` triples.
- `tetrolab.sampler` – `AdaptiveSampler` decides whether to capture a board
  from its maximum height, hole count and number of completed pieces, with a
  random source such as `random.Random`; `DifficultyBin` classifies boards
  and `format_histogram` draws bar-chart lines for progress output.
- `tetrolab.training` – the training schedule: `EvolutionPhase`
  (exploration, transition, convergence by generation),
  `max_weight_by_phase`, `mutation_sigma_by_phase` and `evolver_by_phase`,
  which gives the `EvolverParams` for a phase.
- `tetrolab.index` – `BoardIndex` ranks boards per feature from highest to
  lowest normalized value and answers queries by percentile, by rank range
  or for one board's rank.
- `tetrolab.terminal` – `Terminal` queues ANSI escape sequences and text
  (cursor positions are 0-based) and writes them on `flush()`; `Color` holds
  RGB values and the named colors.
- `tetrolab.panel` – `Panel` describes a bordered, titled area and draws
  its frame; `BodyWriter` fills its body row by row with text, numbers and
  labeled values.
- `tetrolab.controls` – `PlayMode` with the key help for manual and
  automatic play, and `ManualPlayAction.from_key` for key bindings.
- `tetrolab.util` – `Output` writes to a file or standard output,
  `save_json` writes indented JSON, and `format_f32` prints a number as its
  shortest single-precision form with fractional digits grouped in threes
  (`0.123_456_79`).

### Example

```python
from tetrolab.data import load_session_collection
from tetrolab.censoring import overall_censoring_report

collection = load_session_collection("data/boards.json")
print("\n".join(overall_censoring_report(collection.sessions)))
```

## What the package does not do

There is no game engine here. The package cannot play a game, either by
keyboard or with a trained model, and so it does not generate boards files,
run genetic training, or compute board features or Kaplan–Meier curves
itself: the censoring reports work on sessions already on disk, and
`robust_normalization` expects KM medians supplied by the caller. There is
no interactive screen for browsing feature statistics; the terminal and
panel modules provide drawing pieces only.