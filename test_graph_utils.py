"""
Read-only graph inspection and rendering.
"""

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from micro_aad import Var, backward, trace, describe
from micro_aad.core.graph_utils import (
    get_graph_stats,
    print_graph_summary,
    print_computation_graph,
    nodes_frame,
)
from micro_aad.viz import draw_graph, layout


def build():
    a = Var(2.0, "a")
    b = Var(-3.0, "b")
    c = Var(10.0, "c")
    f = Var(-2.0, "f")
    e = (a * b).with_label("e")
    d = (e + c).with_label("d")
    L = (d * f).with_label("L")
    return a, b, c, d, e, f, L


def test_trace_nodes_and_edges():
    a, b, c, d, e, f, L = build()
    nodes, edges = trace(L)
    assert set(nodes) == {a, b, c, d, e, f, L}
    assert nodes[-1] == L
    assert set(edges) == {(a, e), (b, e), (e, d), (c, d), (d, L), (f, L)}
    assert len(edges) == 6


def test_trace_counts_repeated_operand_twice():
    a = Var(1.0, "a")
    s = a + a
    nodes, edges = trace(s)
    assert nodes == [a, s]
    assert edges == [(a, s), (a, s)]


def test_describe():
    a, b, c, d, e, f, L = build()
    assert describe(a) == "a| op:, v:2.0, g:0.0"
    backward(L)
    assert describe(e) == "e| op:*, v:-6.0, g:-2.0"
    assert describe(d) == "d| op:+, v:4.0, g:-2.0"
    assert str(L) == "L| op:*, v:-8.0, g:1.0"


def test_describe_unlabeled_relu():
    y = Var(-1.0).relu()
    assert describe(y) == "| op:ReLU, v:0.0, g:0.0"


def test_graph_stats():
    *_, L = build()
    stats = get_graph_stats(L)
    assert stats['nodes'] == 7
    assert stats['edges'] == 6
    assert stats['leaves'] == 4
    assert stats['max_fan_in'] == 2
    assert stats['max_fan_out'] == 1
    assert stats['operations'] == {'LEAF': 4, 'MUL': 2, 'ADD': 1}


def test_fan_out_with_reuse():
    x = Var(2.0, "x")
    y = (x + 1.0) * (x * 3.0)
    stats = get_graph_stats(y)
    assert stats['max_fan_out'] == 2


def test_print_helpers(capsys):
    *_, L = build()
    stats = print_graph_summary(L, detailed=True)
    print_computation_graph(L, max_nodes=3)
    out = capsys.readouterr().out
    assert "COMPUTATION GRAPH SUMMARY" in out
    assert "DETAILED NODE LIST" in out
    assert "COMPUTATION GRAPH STRUCTURE" in out
    assert "(4 more nodes)" in out
    assert stats['nodes'] == 7


def test_nodes_frame():
    a, b, c, d, e, f, L = build()
    backward(L)
    df = nodes_frame(L)
    assert list(df.columns) == ["index", "label", "op", "value", "grad", "parents"]
    assert len(df) == 7
    row = df.set_index("label").loc["b"]
    assert row["op"] == "LEAF"
    assert row["grad"] == -4.0


def test_layout_depths():
    a, b, c, d, e, f, L = build()
    pos = layout(L)
    assert pos[a.index][0] == 0.0
    assert pos[f.index][0] == 0.0
    assert pos[e.index][0] == 1.0
    assert pos[d.index][0] == 2.0
    assert pos[L.index][0] == 3.0


def test_draw_graph(tmp_path):
    *_, L = build()
    backward(L)
    path = tmp_path / "graph.png"
    fig = draw_graph(L, save_path=str(path))
    try:
        assert path.exists()
        # arrows are empty-text annotations
        texts = [t.get_text() for t in fig.axes[0].texts if t.get_text()]
        assert describe(L) in texts
        assert len(texts) == 7
    finally:
        plt.close(fig)
