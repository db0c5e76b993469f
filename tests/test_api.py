import pytest
from fastapi.testclient import TestClient

from apps.api.sudoku_tool_api import app
from sudoku_engine.board import board_to_grid, board_to_string


@pytest.fixture
def client():
    return TestClient(app)


def test_solve_board(client, rect_board, solution):
    res = client.post("/solve", json={"board": rect_board})
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "solved"
    assert body["board"] == solution
    assert body["forks_tried"] == 1


def test_solve_integer_grid(client, hidden_single_board):
    res = client.post("/solve", json={"grid": board_to_grid(hidden_single_board)})
    assert res.json()["status"] == "solved"


def test_solve_reports_stuck_and_depth(client, two_rect_board):
    body = client.post("/solve", json={"board": two_rect_board}).json()
    assert body["status"] == "stuck"
    assert body["forks_tried"] == 16
    body = client.post("/solve", json={"board": two_rect_board, "max_fork_depth": 2}).json()
    assert body["status"] == "solved"


def test_solve_rejects_bad_requests(client):
    assert client.post("/solve", json={}).status_code == 422
    assert client.post("/solve", json={"board": [], "max_fork_depth": 0}).status_code == 422
    assert client.post("/solve", json={"board": []}).json()["status"] == "invalid"


def test_propagate(client, rect_board, make_board):
    body = client.post("/propagate", json={"board": rect_board}).json()
    assert body["status"] == "stalled"
    assert body["candidates"] == {"r4c6": [1, 3], "r4c9": [1, 3], "r5c6": [1, 3], "r5c9": [1, 3]}

    bad = make_board([(0, 0)], changes={(8, 0): "5"})
    body = client.post("/propagate", json={"board": bad}).json()
    assert body["status"] == "contradiction"
    assert body["cell"] == [1, 1]


def test_propagate_rejects_out_of_range_grid_value(client, solution):
    grid = board_to_grid(solution)
    grid[0][0] = 12
    assert client.post("/propagate", json={"grid": grid}).status_code == 422
    assert client.post("/solve", json={"grid": grid}).json()["status"] == "invalid"


def test_propagate_full_grid_with_repeated_digit(client, make_board):
    body = client.post("/propagate", json={"board": make_board(changes={(0, 0): "3"})}).json()
    assert body["status"] == "contradiction"
    assert body["cell"] is None


def test_parse(client, rect_board):
    res = client.post("/parse", json={"text": board_to_string(rect_board)})
    assert res.json() == {"board": rect_board}
    assert client.post("/parse", json={"text": "nope"}).status_code == 422
