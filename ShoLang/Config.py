from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Options(BaseSettings):
    """Interpreter settings.

    Priority: keyword arguments > environment variables (SHO_*) > defaults.

    method_resolution
        'own' looks methods up on the instance's own class only. 'chain' also
        walks the superclass chain and lets 'super.name' reach the
        superclass's methods.
    assignment
        'strict' makes 'x = 1' an error when x was never declared. 'lenient'
        creates x in the current scope instead.
    recursion_limit
        Python recursion limit applied while a program is evaluated.
    """

    method_resolution: Literal['own', 'chain'] = Field(
        default='own', description="Method lookup: own class only, or the superclass chain"
    )
    assignment: Literal['strict', 'lenient'] = Field(
        default='strict', description="Assigning an undeclared name: error, or create it"
    )
    recursion_limit: int = Field(
        default=10000, ge=100, description="Python recursion limit while evaluating"
    )

    model_config = SettingsConfigDict(
        env_prefix="SHO_",
        extra="ignore",
    )

    @field_validator('method_resolution', 'assignment', mode='before')
    @classmethod
    def normalize_mode(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def walk_superclasses(self):
        return self.method_resolution == 'chain'

    @property
    def strict_assignment(self):
        return self.assignment == 'strict'


# field defaults only, the environment is read when Options() is built
DEFAULT_OPTIONS = Options.model_construct()
