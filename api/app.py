"""HTTP API entrypoint for driving the agent from an out-of-process host."""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from agents import AgentSpec
from game_runner import RoundRunner
from infra.logger import get_logger

logger = get_logger(__name__)

app = FastAPI()
runner: RoundRunner | None = None

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class StartRequest(BaseModel):
    agent: dict


class RoundRequest(BaseModel):
    world: dict


@app.post("/start")
def start(request: StartRequest):
    global runner
    try:
        runner = RoundRunner(AgentSpec.from_dict(request.agent))
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc
    return {"success": True, "agent": runner.agent.name}


@app.post("/round")
def play_round(request: RoundRequest):
    if runner is None:
        raise HTTPException(400, "No active agent")
    try:
        return runner.play(request.world).to_dict()
    except (KeyError, ValueError, RuntimeError) as exc:
        logger.warning("Rejected round: %s", exc)
        raise HTTPException(400, str(exc)) from exc


@app.get("/status")
def status():
    if runner is None:
        return {"active": False}
    return {
        "active": True,
        "agent": runner.agent.name,
        "player": runner.agent.player,
        "last_round": runner.last_round,
        "rounds_played": runner.rounds_played,
    }
