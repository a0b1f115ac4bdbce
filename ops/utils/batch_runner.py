import importlib.util
import os
import time

from ops.utils import log
from ops.utils.batch_args import BatchArgs
from ops.utils.batch_builder import BatchBuilder
from ops.utils.errors import BatchArgumentError, BatchScriptError, StateReadError
from ops.utils.state_reader import StateReader


class BatchScript:
    """
    What a batch function receives: the builder for the batch being
    assembled plus the configuration, chain registry and state reader of the
    run.
    """

    def __init__(self, batch_args: BatchArgs, builder: BatchBuilder, reader=None):
        self._batch_args = batch_args
        self._reader = reader
        self.builder = builder

    @property
    def chain(self):
        return self._batch_args.chain

    @property
    def config(self):
        return self._batch_args.config

    @property
    def args(self):
        return self._batch_args.args

    @property
    def classifier(self):
        return self._batch_args.classifier

    @property
    def origin(self):
        return self._batch_args.origin

    @property
    def reader(self):
        if self._reader is None:
            raise StateReadError(self.chain, "rpc", "No RPC configured for state reads")
        return self._reader

    @property
    def log(self):
        return log

    def category(self, chain=None):
        return self.classifier.classify(chain or self.chain)

    def get_address(self, key, allow_zero=False):
        return self.config.get_address(key, allow_zero=allow_zero)

    def flag(self, name, default=False):
        # JSON booleans only: a string such as "false" would otherwise read as true
        value = self.args.get(name, default)
        if not isinstance(value, bool):
            raise BatchArgumentError(name, value, "Expected true or false")
        return value

    def append(self, target, payload, value=0, description=""):
        return self.builder.append(target, payload, value, description)

    def append_if_guard_fails(self, guard, target, payload, value=0, description=""):
        return self.builder.append_if_guard_fails(guard, target, payload, value, description)


class BatchRunner:
    """
    Loads `<batches_dir>/<contract>.py`, runs one of its functions to build a
    batch and hands the finalized batch to a proposal sink.
    """

    def __init__(self, batches_dir):
        self.batches_dir = batches_dir

    def load(self, contract, function):
        filename = os.path.join(self.batches_dir, f"{contract}.py")
        if not os.path.isfile(filename):
            raise BatchScriptError(contract)

        spec = importlib.util.spec_from_file_location(f"batches.{contract}", filename)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        batch_function = getattr(module, function, None)
        if function.startswith("_") or not callable(batch_function):
            raise BatchScriptError(contract, function, "Batch function not found")
        return batch_function

    def run(self, batch_args: BatchArgs, contract, function, sink, reader=None):
        """
        Builds and submits one batch. Returns the sink's result, or `None`
        when the batch turned out empty and empty batches are allowed.

        Any error aborts the run before the sink sees anything.
        """
        batch_function = self.load(contract, function)
        label = f"{int(time.time())}-{contract}-{function}"

        if reader is None and batch_args.rpc:
            reader = StateReader(batch_args.rpc)

        builder = BatchBuilder(require_non_empty=not batch_args.allow_empty)
        script = BatchScript(batch_args, builder, reader)

        log.h1(f"Building batch {contract}.{function} on {batch_args.chain}...")
        try:
            batch_function(script)
            batch = builder.finalize(batch_args.origin)
        except Exception as exception:
            log.error(f"Batch {contract}.{function} aborted with {len(builder)} operations discarded: {exception}")
            raise

        if len(batch) == 0:
            log.h2("Nothing to propose: every step already holds")
            return None

        return sink.submit(batch, label)
