import logging

import pytest

import markovchain.__main__
import markovchain.corpus


@pytest.fixture(autouse=True)
def isolated_cwd (tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:

	"""Run every test in an empty directory so no stray config is picked up."""

	monkeypatch.chdir(tmp_path)


def test_load_config_missing_file_warns (caplog) -> None:

	with caplog.at_level(logging.WARNING):
		config = markovchain.__main__.load_config("missing.yaml")

	assert config == {}
	assert "missing.yaml not found" in caplog.text


def test_load_config_reads_yaml (tmp_path) -> None:

	path = tmp_path / "chain.yaml"
	path.write_text("walk:\n  steps: 5\n  seed: 3\n")

	assert markovchain.__main__.load_config(str(path)) == {"walk": {"steps": 5, "seed": 3}}


def test_load_config_empty_file (tmp_path) -> None:

	path = tmp_path / "empty.yaml"
	path.write_text("")

	assert markovchain.__main__.load_config(str(path)) == {}


def test_corpus_walk_is_printed (tmp_path, capsys) -> None:

	corpus = tmp_path / "corpus.txt"
	corpus.write_text("the man and the man\n")

	status = markovchain.__main__.main(["--corpus", str(corpus), "--steps", "4", "--seed", "1"])

	assert status == 0
	assert capsys.readouterr().out.strip() == "the man and the man"


def test_corpus_lowercase_option (tmp_path, capsys) -> None:

	corpus = tmp_path / "corpus.txt"
	corpus.write_text("The man and the MAN\n")

	status = markovchain.__main__.main(["--corpus", str(corpus), "--lowercase", "--steps", "2", "--start", "man"])

	assert status == 0
	assert capsys.readouterr().out.strip() == "man and the"


def test_transition_table_from_config (tmp_path, capsys) -> None:

	config = tmp_path / "weather.yaml"
	config.write_text(
		"transitions:\n"
		"  S: [[R, 1.0]]\n"
		"  R: [[S, 1.0]]\n"
		"walk:\n"
		"  start: R\n"
		"  steps: 3\n"
	)

	status = markovchain.__main__.main(["--config", str(config)])

	assert status == 0
	assert capsys.readouterr().out.strip() == "R S R S"


def test_seeded_runs_are_reproducible (tmp_path, capsys) -> None:

	config = tmp_path / "weather.yaml"
	config.write_text(
		"transitions:\n"
		"  S: [[R, 0.1], [S, 0.9]]\n"
		"  R: [[S, 0.5], [R, 0.5]]\n"
	)

	markovchain.__main__.main(["--config", str(config), "--seed", "9", "--steps", "30"])
	first = capsys.readouterr().out

	markovchain.__main__.main(["--config", str(config), "--seed", "9", "--steps", "30"])
	second = capsys.readouterr().out

	assert first == second
	assert set(first.split()) <= {"S", "R"}
	assert len(first.split()) == 31


def test_no_chain_source_fails (caplog) -> None:

	with caplog.at_level(logging.ERROR):
		status = markovchain.__main__.main([])

	assert status == 1
	assert "No chain source configured" in caplog.text


def test_unknown_start_state_fails (tmp_path, caplog) -> None:

	corpus = tmp_path / "corpus.txt"
	corpus.write_text("a b c\n")

	with caplog.at_level(logging.ERROR):
		status = markovchain.__main__.main(["--corpus", str(corpus), "--start", "zebra"])

	assert status == 1
	assert "zebra" in caplog.text


def test_invalid_table_fails (tmp_path, caplog) -> None:

	config = tmp_path / "bad.yaml"
	config.write_text("transitions:\n  a: [[a, 0.8], [b, 0.8]]\n")

	with caplog.at_level(logging.ERROR):
		status = markovchain.__main__.main(["--config", str(config)])

	assert status == 1
	assert "Cannot generate walk" in caplog.text


def test_empty_corpus_fails (tmp_path, caplog) -> None:

	corpus = tmp_path / "empty.txt"
	corpus.write_text("\n")

	with caplog.at_level(logging.ERROR):
		status = markovchain.__main__.main(["--corpus", str(corpus)])

	assert status == 1
	assert "Chain is empty" in caplog.text


def test_missing_corpus_file_fails (caplog) -> None:

	with caplog.at_level(logging.ERROR):
		status = markovchain.__main__.main(["--corpus", "nope.txt"])

	assert status == 1
	assert "Cannot generate walk" in caplog.text


@pytest.mark.parametrize("text, message", [
	("just a string\n", "must contain a mapping"),
	("transitions:\n  a: 5\n", "list of [target, probability] pairs"),
	("transitions: [a, b]\n", "'transitions' must be a mapping"),
	("transitions:\n  a: [[b]]\n", "[target, probability] pair"),
	("transitions:\n  a: [[a, lots]]\n", "lots"),
	("walk: fast\ntransitions:\n  a: [[a, 1.0]]\n", "'walk' must be a mapping"),
	("corpus: [x]\n", "'corpus' must be a mapping"),
	("walk:\n  steps: many\ntransitions:\n  a: [[a, 1.0]]\n", "many"),
	("walk:\n  steps: -3\ntransitions:\n  a: [[a, 1.0]]\n", "-3"),
	("walk:\n  seed: [1, 2]\ntransitions:\n  a: [[a, 1.0]]\n", "Cannot generate walk"),
	("transitions: {a: [[a, 1.0]\n", "Cannot generate walk"),
])
def test_malformed_config_fails (tmp_path, caplog, text: str, message: str) -> None:

	"""Badly shaped config is logged as an error rather than raised."""

	config = tmp_path / "bad.yaml"
	config.write_text(text)

	with caplog.at_level(logging.ERROR):
		status = markovchain.__main__.main(["--config", str(config)])

	assert status == 1
	assert "Cannot generate walk" in caplog.text
	assert message in caplog.text


def test_load_config_rejects_non_mapping (tmp_path) -> None:

	path = tmp_path / "list.yaml"
	path.write_text("- a\n- b\n")

	with pytest.raises(ValueError):
		markovchain.__main__.load_config(str(path))


def test_table_keys_are_read_as_strings (tmp_path, capsys) -> None:

	"""Numeric YAML keys can be selected with --start."""

	config = tmp_path / "numbers.yaml"
	config.write_text(
		"transitions:\n"
		"  1: [[2, 1.0]]\n"
		"  2: [[1, 1.0]]\n"
	)

	status = markovchain.__main__.main(["--config", str(config), "--start", "1", "--steps", "2"])

	assert status == 0
	assert capsys.readouterr().out.strip() == "1 2 1"


def test_quoted_boolean_words_are_state_keys (tmp_path, capsys) -> None:

	config = tmp_path / "answers.yaml"
	config.write_text(
		"transitions:\n"
		"  'yes': [['no', 1.0]]\n"
		"  'no': [['yes', 1.0]]\n"
	)

	status = markovchain.__main__.main(["--config", str(config), "--start", "yes", "--steps", "1"])

	assert status == 0
	assert capsys.readouterr().out.strip() == "yes no"


def test_corpus_is_read_lazily (tmp_path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:

	"""The corpus reaches the builder as an iterator, not a materialised list."""

	corpus = tmp_path / "corpus.txt"
	corpus.write_text("a b a\n")

	received = []
	build = markovchain.corpus.from_token_sequence

	def recording_build (tokens, rng=None):
		received.append(tokens)
		return build(tokens, rng=rng)

	monkeypatch.setattr(markovchain.corpus, "from_token_sequence", recording_build)

	status = markovchain.__main__.main(["--corpus", str(corpus), "--steps", "2"])

	assert status == 0
	assert not isinstance(received[0], list)
	assert capsys.readouterr().out.strip() == "a b a"
