"""A small 2D world: a ball-shaped player, box walls and a goal point."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from dotseeker.agent import DEFAULT_ACTION, PlayerAction

Vec2 = tuple[float, float]

PIXELS_PER_METER = 100.0
GRAVITY: Vec2 = (0.0, -9.81 * PIXELS_PER_METER)
MOVE_SPEED = 40.0
GOAL_RADIUS = 0.5
GOAL_REWARD = 1.0
DISTANCE_PENALTY = 0.1

PLAYER_SPAWN: Vec2 = (0.0, 0.0)
PLAYER_RADIUS = 10.0
GOAL_POSITION: Vec2 = (200.0, 200.0)
WALLS: tuple[tuple[Vec2, Vec2], ...] = (
    ((0.0, 300.0), (400.0, 10.0)),  # top
    ((0.0, -300.0), (400.0, 10.0)),  # bottom
    ((400.0, 0.0), (10.0, 300.0)),  # right
    ((-400.0, 0.0), (10.0, 300.0)),  # left
)

_ACTION_VELOCITY: dict[PlayerAction, Vec2] = {
    PlayerAction.UP: (0.0, MOVE_SPEED),
    PlayerAction.DOWN: (0.0, -MOVE_SPEED),
    PlayerAction.LEFT: (-MOVE_SPEED, 0.0),
    PlayerAction.RIGHT: (MOVE_SPEED, 0.0),
}


class BodyKind(Enum):
    PLAYER = "player"
    WALL = "wall"
    GOAL = "goal"


@dataclass
class Body:
    """An entity in the world: a dynamic ball, a fixed box or a bare point."""

    kind: BodyKind
    position: Vec2
    velocity: Vec2 = (0.0, 0.0)
    angular_velocity: float = 0.0
    radius: float | None = None
    half_extents: Vec2 | None = None


class World:
    """Holds bodies by entity id and advances the dynamic ones in time."""

    def __init__(self, gravity: Vec2 = GRAVITY) -> None:
        self.gravity = gravity
        self.bodies: dict[int, Body] = {}
        self._next_id = 0

    def _spawn(self, body: Body) -> int:
        entity = self._next_id
        self._next_id += 1
        self.bodies[entity] = body
        return entity

    def spawn_player(self, position: Vec2, radius: float) -> int:
        """Add a dynamic ball player at rest and return its entity id."""
        return self._spawn(
            Body(BodyKind.PLAYER, (float(position[0]), float(position[1])), radius=radius)
        )

    def spawn_wall(self, position: Vec2, half_extents: Vec2) -> int:
        """Add a fixed box wall and return its entity id."""
        return self._spawn(
            Body(
                BodyKind.WALL,
                (float(position[0]), float(position[1])),
                half_extents=(float(half_extents[0]), float(half_extents[1])),
            )
        )

    def spawn_goal(self, position: Vec2) -> int:
        """Add a goal point without a collider and return its entity id."""
        return self._spawn(Body(BodyKind.GOAL, (float(position[0]), float(position[1]))))

    def get(self, entity: int, kind: BodyKind) -> Body | None:
        """Return the body for an entity if it exists and is of the given kind."""
        body = self.bodies.get(entity)
        if body is None or body.kind is not kind:
            return None
        return body

    def step_physics(self, dt: float) -> None:
        """Integrate players under gravity and push them out of walls."""
        walls = [b for b in self.bodies.values() if b.kind is BodyKind.WALL]
        for body in self.bodies.values():
            if body.kind is not BodyKind.PLAYER:
                continue
            vx = body.velocity[0] + self.gravity[0] * dt
            vy = body.velocity[1] + self.gravity[1] * dt
            body.velocity = (vx, vy)
            body.position = (body.position[0] + vx * dt, body.position[1] + vy * dt)
            for wall in walls:
                _resolve_ball_box(body, wall)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _resolve_ball_box(ball: Body, box: Body) -> None:
    radius = ball.radius or 0.0
    hx, hy = box.half_extents or (0.0, 0.0)
    dx = ball.position[0] - box.position[0]
    dy = ball.position[1] - box.position[1]
    qx, qy = _clamp(dx, -hx, hx), _clamp(dy, -hy, hy)

    if qx == dx and qy == dy:
        pen_x, pen_y = hx - abs(dx), hy - abs(dy)
        if pen_x < pen_y:
            normal = (math.copysign(1.0, dx), 0.0)
            depth = pen_x + radius
        else:
            normal = (0.0, math.copysign(1.0, dy))
            depth = pen_y + radius
    else:
        ox, oy = dx - qx, dy - qy
        dist = math.hypot(ox, oy)
        if dist >= radius:
            return
        normal = (ox / dist, oy / dist)
        depth = radius - dist

    ball.position = (
        ball.position[0] + normal[0] * depth,
        ball.position[1] + normal[1] * depth,
    )
    vn = ball.velocity[0] * normal[0] + ball.velocity[1] * normal[1]
    if vn < 0.0:
        ball.velocity = (
            ball.velocity[0] - normal[0] * vn,
            ball.velocity[1] - normal[1] * vn,
        )


@dataclass
class Environment:
    """Entity ids of the episode's player, goal and walls."""

    player: int
    player_initial_spawn_position: Vec2
    goal: int
    walls: list[int]


@dataclass
class SimulationState:
    """The observation, reward and chosen action of the current step."""

    rl_state: list[float] = field(default_factory=list)
    current_reward: float = 0.0
    action: PlayerAction = DEFAULT_ACTION


def setup_environment(world: World) -> Environment:
    """Spawn the player, the goal and the four boundary walls."""
    player = world.spawn_player(PLAYER_SPAWN, PLAYER_RADIUS)
    goal = world.spawn_goal(GOAL_POSITION)
    walls = [world.spawn_wall(pos, half) for pos, half in WALLS]
    return Environment(
        player=player,
        player_initial_spawn_position=PLAYER_SPAWN,
        goal=goal,
        walls=walls,
    )


def observe(world: World, environment: Environment) -> list[float]:
    """Return player position, player velocity and goal position, zeros if absent."""
    observation: list[float] = []
    player = world.get(environment.player, BodyKind.PLAYER)
    if player is not None:
        observation.extend((*player.position, *player.velocity))
    else:
        observation.extend((0.0, 0.0, 0.0, 0.0))
    goal = world.get(environment.goal, BodyKind.GOAL)
    if goal is not None:
        observation.extend(goal.position)
    else:
        observation.extend((0.0, 0.0))
    return observation


def compute_reward(world: World, environment: Environment) -> float | None:
    """Reward for the current positions, or None if player or goal is missing."""
    player = world.get(environment.player, BodyKind.PLAYER)
    goal = world.get(environment.goal, BodyKind.GOAL)
    if player is None or goal is None:
        return None
    distance = math.dist(player.position, goal.position)
    if distance < GOAL_RADIUS:
        return GOAL_REWARD
    return -distance * DISTANCE_PENALTY


def reset_environment(
    world: World, environment: Environment, state: SimulationState
) -> None:
    """Put player and goal back in place and clear the step state."""
    player = world.get(environment.player, BodyKind.PLAYER)
    if player is not None:
        spawn = environment.player_initial_spawn_position
        player.position = (float(spawn[0]), float(spawn[1]))
        player.velocity = (0.0, 0.0)
        player.angular_velocity = 0.0
    goal = world.get(environment.goal, BodyKind.GOAL)
    if goal is not None:
        goal.position = GOAL_POSITION
    state.rl_state.clear()
    state.current_reward = 0.0


def perform_action(world: World, environment: Environment, action: PlayerAction) -> None:
    """Set the player's linear velocity for the chosen direction."""
    player = world.get(environment.player, BodyKind.PLAYER)
    if player is not None:
        player.velocity = _ACTION_VELOCITY[PlayerAction(action)]