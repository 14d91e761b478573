from gridplane.core.parameters.meta import PARAM_KINDS, ParamMeta

__all__ = ["PARAM_KINDS", "ParamMeta"]
