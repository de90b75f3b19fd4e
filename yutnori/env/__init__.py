from .gym_env import ACTION_SPACE_SIZE, THROWS, YutnoriEnv, decode_action, encode_action, render_ascii

__all__ = ["ACTION_SPACE_SIZE", "THROWS", "YutnoriEnv", "decode_action", "encode_action", "render_ascii"]
