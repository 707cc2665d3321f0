"""create-dapp scaffolder -- turns a template into a ready-to-install project.

Three stages run in order against the same target directory:

1. ``FileMaterializer`` copies the template tree, skipping excluded names and
   renaming ``_gitignore``.
2. ``VariantResolver`` applies template and signing-variant edits and returns
   the template's extra ``.env`` content.
3. ``EnvironmentSynthesizer`` creates the publisher account and writes
   ``.env``.

Quick usage::

    from create_dapp.scaffolder import FileMaterializer, VariantResolver

    await FileMaterializer().materialize(template_dir, target_dir)
    extra = await VariantResolver().resolve(selections, target_dir)
"""

from create_dapp.scaffolder.env_file import EnvironmentSynthesizer
from create_dapp.scaffolder.materializer import FileMaterializer
from create_dapp.scaffolder.templates import TemplateRenderer
from create_dapp.scaffolder.variants import VariantResolver

__all__ = [
    "EnvironmentSynthesizer",
    "FileMaterializer",
    "TemplateRenderer",
    "VariantResolver",
]
