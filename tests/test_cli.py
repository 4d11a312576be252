import numpy as np

import edge_demo


def test_demo_writes_outputs(tmp_path, capsys):
    code = edge_demo.main(["--scene", "checker", "--size", "32", "--blur_radius", "1",
                           "--repeat", "2", "--outdir", str(tmp_path)])
    assert code == 0
    assert (tmp_path / "pipeline_overview.png").exists()
    assert (tmp_path / "magnitude_histogram.png").exists()
    out = np.load(tmp_path / "output.npy")
    assert out.shape == (32, 32, 4)
    assert "[OK]" in capsys.readouterr().out


def test_demo_compares_with_reference(tmp_path, capsys):
    first = tmp_path / "first"
    edge_demo.main(["--scene", "slanted_edge", "--size", "24", "--outdir", str(first)])
    ref = np.load(first / "output.npy")[:, :, 0]
    ref_path = tmp_path / "native.npy"
    np.save(ref_path, ref)

    code = edge_demo.main(["--scene", "slanted_edge", "--size", "24", "--reference", str(ref_path),
                           "--outdir", str(tmp_path / "second")])
    assert code == 0
    assert "Agreement vs reference: 1.0000" in capsys.readouterr().out


def test_demo_rejects_bad_thresholds(tmp_path, capsys):
    code = edge_demo.main(["--low", "200", "--high", "100", "--outdir", str(tmp_path)])
    assert code == 2
    assert "[ERROR]" in capsys.readouterr().out


def test_demo_reports_missing_input_file(tmp_path, capsys):
    code = edge_demo.main(["--input", str(tmp_path / "nope.png"), "--outdir", str(tmp_path)])
    assert code == 2
    assert "[ERROR]" in capsys.readouterr().out


def test_demo_reports_missing_reference_file(tmp_path, capsys):
    code = edge_demo.main(["--scene", "checker", "--size", "16", "--reference", str(tmp_path / "nope.npy"),
                           "--outdir", str(tmp_path)])
    assert code == 2
    assert "[ERROR]" in capsys.readouterr().out
