"""Preflight action: verify a step's inputs against its action metadata.

Reads inputs, loads action.yml, reports every required input that was not
supplied, sets action outputs, and returns the exit code for the step.
"""

from __future__ import annotations

import time

from actions_toolkit.action_metadata import MetadataError, load_metadata, missing_inputs
from actions_toolkit.core import Core, ExitCode


def main(core: Core | None = None) -> int:
    """Run the input preflight check."""
    core = core or Core()
    start_time = time.time()

    # Read inputs
    metadata_path = core.get_input("metadata_path") or "."
    fail_on_missing = core.get_bool_input("fail_on_missing", True)

    # Step 1: Load metadata
    with core.grouped("Loading action metadata"):
        try:
            metadata = load_metadata(metadata_path)
        except (FileNotFoundError, MetadataError) as e:
            # Later steps always see both outputs
            core.set_output("inputs_checked", "0")
            core.set_output("missing_inputs", "")
            core.set_failed(str(e))
            return ExitCode.FAILURE
        core.info(f"  Action: {metadata.name}")
        core.info(f"  Source: {metadata.source_path}")
        core.info(f"  Inputs declared: {len(metadata.inputs)}")

    # Step 2: Check inputs
    with core.grouped("Checking inputs"):
        if core.is_debug():
            for spec in metadata.inputs:
                core.debug(
                    f"{spec.name}: required={str(spec.required).lower()}, "
                    f"default={'set' if spec.default is not None else 'none'}"
                )
        missing = missing_inputs(metadata, core)
        report = core.error if fail_on_missing else core.warning
        for name in missing:
            report(f"Input required and not supplied: {name}")
        core.info(f"  Missing: {len(missing)}")

    # Set outputs
    core.set_output("inputs_checked", str(len(metadata.inputs)))
    core.set_output("missing_inputs", ",".join(missing))

    elapsed = time.time() - start_time
    status = "fail" if missing and fail_on_missing else "pass"
    core.info(f"Completed in {elapsed:.2f}s: status {status.upper()}")

    return ExitCode.FAILURE if status == "fail" else ExitCode.SUCCESS
