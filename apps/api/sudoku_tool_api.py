# sudoku_tool_api.py
# Optional FastAPI wrapper for the solver tool functions.
# Run with: uvicorn apps.api.sudoku_tool_api:app --reload
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from sudoku_engine.board import board_from_grid, parse_board
from sudoku_engine.errors import Contradiction, InvalidBoard
from sudoku_engine.solver import propagate, solve_tool

app = FastAPI(title="Sudoku Fork Solver API")


class SolveRequest(BaseModel):
    board: list[list[str]] | None = None
    grid: list[list[int]] | None = None
    max_fork_depth: int | None = None
    record_moves: bool | None = None


class TextModel(BaseModel):
    text: str


def _board_of(req: SolveRequest) -> list[list[str]]:
    if req.board is not None:
        return req.board
    if req.grid is not None:
        return board_from_grid(req.grid)
    raise HTTPException(status_code=422, detail="either 'board' or 'grid' is required")


@app.post("/parse")
def api_parse(payload: TextModel):
    board = parse_board(payload.text)
    if not board:
        raise HTTPException(status_code=422, detail="could not parse a 9x9 board")
    return {"board": board}


@app.post("/solve")
def api_solve(req: SolveRequest):
    config = {"max_fork_depth": req.max_fork_depth, "record_moves": req.record_moves}
    try:
        return solve_tool(_board_of(req), {k: v for k, v in config.items() if v is not None})
    except ValueError as ex:
        raise HTTPException(status_code=422, detail=str(ex))


@app.post("/propagate")
def api_propagate(req: SolveRequest):
    try:
        state = propagate(_board_of(req))
    except InvalidBoard as ex:
        raise HTTPException(status_code=422, detail=str(ex))
    except Contradiction as ex:
        return {"status": "contradiction", "error": str(ex), "cell": ex.cell}
    return {
        "status": "solved" if state.is_solved() else "stalled",
        "board": state.to_board(),
        "candidates": state.candidates(),
        "remaining": state.remaining,
        "percent": state.percent(),
    }
