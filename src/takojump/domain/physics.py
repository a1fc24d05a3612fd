from __future__ import annotations

from dataclasses import replace

from takojump.domain.config import DEFAULT_PHYSICS, PhysicsConfig
from takojump.domain.game_state import Character, Vector2


def apply_gravity(character: Character, cfg: PhysicsConfig = DEFAULT_PHYSICS) -> Character:
    if character.is_dead:
        return character

    vy = min(character.velocity.y + cfg.gravity, cfg.max_fall_speed)
    return replace(character, velocity=Vector2(character.velocity.x, vy))


def advance(character: Character) -> Character:
    p, v = character.position, character.velocity
    return replace(character, position=Vector2(p.x + v.x, p.y + v.y))
