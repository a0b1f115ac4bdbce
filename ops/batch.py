import os
import sys

import click
import dotenv

from config.Chains import CHAINS
from ops.utils import json_file, log
from ops.utils.batch_args import BatchArgs
from ops.utils.batch_runner import BatchRunner
from ops.utils.chain_classifier import ChainClassifier
from ops.utils.constants import ORIGINS
from ops.utils.env_config import EnvConfig
from ops.utils.errors import BatchError
from ops.utils.governor_sink import GOVERNOR_ORIGIN, GovernorSink
from ops.utils.proposal_sink import BATCH_HISTORY_DIR, ProposalSink

BATCH_SCRIPTS_DIR = "./batches"
ENV_CONFIG_FILE = "./config/env.json"


CLICK_PROMPTS = {
    "contract": {
        "prompt": "Batch contract (file in ./batches)",
        "default": "",
        "help": "Name of the batch script, e.g. `RolesConfig`.",
    },
    "function": {
        "prompt": "Batch function",
        "default": "",
        "help": "Function of the batch script that builds the batch.",
    },
    "chain": {
        "prompt": "Chain name",
        "default": "mainnet",
        "help": "Chain the batch executes on. Defaults to `mainnet`.",
        "type": click.Choice(list(CHAINS.keys()), case_sensitive=False),
    },
    "origin": {
        "prompt": "Proposing multisig",
        "default": "dao",
        "help": "Origin the batch is proposed from: a multisig (dao, policy, emergency) or the governor. Defaults to `dao`.",
        "type": click.Choice(list(ORIGINS), case_sensitive=False),
    },
    "args": {
        "default": "",
        "help": "JSON file with arguments for the batch function.",
    },
    "env": {
        "default": ".env",
        "help": "Environment file to load. Defaults to `.env`.",
    },
    "rpc": {
        "default": "",
        "help": "RPC url. Defaults to RPC_URL, then to the Alchemy url of the chain.",
    },
}


def param_prompt(ctx, param, value):
    param_config = CLICK_PROMPTS.get(param.name)
    if param_config is None:
        return value

    default_val = param_config.get("default")
    prompt = param_config.get("prompt")

    if value != default_val:
        return value

    if prompt is None or ctx.params.get("silent"):
        return value

    return click.prompt(
        f"{prompt} --{param.name.replace('_', '-')}",
        default=default_val,
        type=param_config.get("type"),
    )


def resolve_rpc(rpc, chain):
    if rpc:
        return rpc
    if os.environ.get("RPC_URL"):
        return os.environ["RPC_URL"]
    alchemy = CHAINS.get(chain, {}).get("alchemy")
    api_key = os.environ.get("WEB3_ALCHEMY_API_KEY")
    if alchemy and api_key:
        return f"https://{alchemy}.g.alchemy.com/v2/{api_key}"
    return None


@click.command()
@click.option("--silent", is_flag=True, default=False, is_eager=True, help="Run command without prompts.")
@click.option("--contract", "-c", default=CLICK_PROMPTS["contract"]["default"],
              help=CLICK_PROMPTS["contract"]["help"], callback=param_prompt)
@click.option("--function", "-f", default=CLICK_PROMPTS["function"]["default"],
              help=CLICK_PROMPTS["function"]["help"], callback=param_prompt)
@click.option("--chain", default=CLICK_PROMPTS["chain"]["default"],
              help=CLICK_PROMPTS["chain"]["help"], callback=param_prompt)
@click.option("--origin", "-o", default=CLICK_PROMPTS["origin"]["default"],
              type=CLICK_PROMPTS["origin"]["type"],
              help=CLICK_PROMPTS["origin"]["help"], callback=param_prompt)
@click.option("--args", "args_file", default=CLICK_PROMPTS["args"]["default"], help=CLICK_PROMPTS["args"]["help"])
@click.option("--env", "env_file", default=CLICK_PROMPTS["env"]["default"], help=CLICK_PROMPTS["env"]["help"])
@click.option("--rpc", default=CLICK_PROMPTS["rpc"]["default"], help=CLICK_PROMPTS["rpc"]["help"])
@click.option("--config", "config_file", default=ENV_CONFIG_FILE, help="Deployment address table.")
@click.option("--overrides", default="", help="Optional JSON file merged over the address table.")
@click.option("--send", is_flag=True, default=False,
              help="Propose the batch to the Safe. Without it the batch is only simulated and printed.")
@click.option("--allow-empty", is_flag=True, default=False, help="Treat an empty batch as a no-op instead of an error.")
@click.option("--no-simulate", is_flag=True, default=False, help="Skip the eth_call simulation of a dry run.")
@click.option("--batches-dir", default=BATCH_SCRIPTS_DIR, help="Directory holding the batch scripts.")
@click.option("--history-dir", default=BATCH_HISTORY_DIR, help="Directory the batch files are written to.")
def cli(silent, contract, function, chain, origin, args_file, env_file, rpc, config_file, overrides, send,
        allow_empty, no_simulate, batches_dir, history_dir):
    """
    Builds a governance batch and proposes it to a multisig.

    The batch is built by calling `--function` of `./batches/<contract>.py`.
    Each step of a batch is checked against live state first and skipped
    when it already holds. By default the batch is only printed, simulated
    and written as a Safe Transaction Builder file under `./batch_history`;
    with `--send` it is proposed to the Safe of `--origin` for signing.
    """
    dotenv.load_dotenv(env_file)

    try:
        classifier = ChainClassifier.from_chains(CHAINS)
        if not classifier.is_evm(chain):
            raise click.BadParameter(f"{chain} has no Safe: batches must target an EVM chain", param_hint="--chain")

        final_rpc = resolve_rpc(rpc, chain)
        env_config = EnvConfig.load(config_file, overrides=overrides or None)
        batch_args = BatchArgs(
            chain,
            env_config,
            rpc=final_rpc,
            origin=origin,
            send=send,
            sender=os.environ.get("SIGNER_ADDRESS"),
            args=json_file.load(args_file) if args_file else {},
            classifier=classifier,
            allow_empty=allow_empty,
        )

        log.h1("Governance Batch")
        log.info(f"Connected to rpc `{final_rpc}`." if final_rpc else "No rpc configured: guards cannot read state.")
        log.info(f"Chain: {chain} ({classifier.classify(chain).value}).")
        log.info(f"Origin: {origin}.")
        log.info(f"Send: {send}.")
        log.info(f"Batch arguments: {batch_args}")

        sink = ProposalSink(
            chain,
            batch_args.origins(),
            send=send,
            rpc_url=final_rpc,
            history_dir=history_dir,
            sender_address=batch_args.sender,
            safe_service_url=os.environ.get("SAFE_TRANSACTION_SERVICE_URL"),
            simulate=not no_simulate,
        )
        if origin == GOVERNOR_ORIGIN:
            sink = GovernorSink(
                chain,
                batch_args.config.get_address("olympus.Governor"),
                sink,
                description=batch_args.args.get("description"),
                history_dir=history_dir,
            )
        BatchRunner(batches_dir).run(batch_args, contract, function, sink)
    except BatchError as exception:
        log.error(f"{type(exception).__name__}: {exception}")
        if exception.__cause__ is not None:
            log.error(f"Caused by: {exception.__cause__}")
        sys.exit(1)

    log.info("Done.")
    log.info("")


if __name__ == "__main__":
    cli()
