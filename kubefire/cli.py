"""
This module purpose is to handle command line interface
"""

import argparse
import json
from pathlib import Path
import sys
from typing import List

from .cluster import ClusterManager
from .config import ClusterConfig
from .errors import KubefireError
from .global_config import KubefireConfig
from .models import NodeRecord
from . import script
from .utils import setup_logging, info, success, error, heading, format_table

def main(argv=None):
    """
    main: main loop for the program
    """
    parser = argparse.ArgumentParser(description="kubefire - Firecracker cluster node manager")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # kubefire install / uninstall
    prepare_cmd_prerequisites(subparsers)

    # kubefire cluster create|delete|get
    prepare_cmd_cluster(subparsers)

    # kubefire node get|list|delete
    prepare_cmd_node(subparsers)

    args = parser.parse_args(argv)

    try:
        config = KubefireConfig().load({"log_level": args.log_level})
        setup_logging(config.data["log_level"])

        if args.command in ("install", "uninstall"):
            cmd_prerequisites(args, config)
        elif args.command == "cluster":
            cmd_cluster(args, config)
        elif args.command == "node":
            cmd_node(args, config)
    except KubefireError as e:
        error(str(e))
        return 1
    return 0

def prepare_cmd_prerequisites(subparsers):
    """
    prepare_cmd_prerequisites: prepares parsers for `install` and `uninstall`
    """
    for name, help_text in (("install", "Install prerequisites"),
                            ("uninstall", "Uninstall prerequisites")):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("--version", help="kubefire release the script belongs to")
        p.add_argument("--force", "-f", action="store_true",
                       help="Download the script again even if it is cached")

def cmd_prerequisites(args, config: KubefireConfig):
    """
    cmd_prerequisites: handles 'install' and 'uninstall' commands
    """
    target = (script.Script.INSTALL_PREREQUISITES if args.command == "install"
              else script.Script.UNINSTALL_PREREQUISITES)
    version = args.version or config.data["version"]

    script.download(target, version, args.force,
                    base_url=config.data["script_base_url"],
                    scripts_dir=config.scripts_dir)
    script.run(target, version, scripts_dir=config.scripts_dir, executor=config.executor())
    success(f"{args.command.capitalize()}ed prerequisites ({version})")

def prepare_cmd_cluster(subparsers):
    """
    prepare_cmd_cluster: prepares parser for subcommand and args for `cluster`
    """
    cluster_p = subparsers.add_parser("cluster", help="Manage clusters")
    cluster_sub = cluster_p.add_subparsers(dest="action", required=True)

    for action, help_text in (("create", "Create all nodes of a cluster"),
                              ("delete", "Delete all nodes of a cluster")):
        p = cluster_sub.add_parser(action, help=help_text)
        p.add_argument("--config", "-c", required=True, type=Path, help="Cluster config file")
        p.add_argument("--dry-run", "-n", action="store_true",
                       help="Show what would be done without applying changes")

    get_p = cluster_sub.add_parser("get", help="Show the nodes of a cluster")
    get_p.add_argument("name", help="Cluster name")
    add_format_arg(get_p)

def cmd_cluster(args, config: KubefireConfig):
    """
    cmd_cluster: handles 'cluster' command
    """
    manager = ClusterManager(config.node_manager())

    if args.action == "get":
        print_nodes(manager.get(args.name), args.format)
        return

    cluster = ClusterConfig(args.config).load()
    if args.action == "create":
        planned = manager.create(cluster, dry_run=args.dry_run)
    else:
        planned = manager.delete(cluster, dry_run=args.dry_run)

    for desc in planned:
        print(f"  {desc}")
    if args.dry_run:
        info("DRY RUN: No changes applied")
    else:
        success(f"Cluster '{cluster.name}' {args.action}d")

def prepare_cmd_node(subparsers):
    """
    prepare_cmd_node: prepares parser for subcommand and args for `node`
    """
    node_p = subparsers.add_parser("node", help="Manage nodes")
    node_sub = node_p.add_subparsers(dest="action", required=True)

    get_p = node_sub.add_parser("get", help="Show a node")
    get_p.add_argument("name", help="Node name")
    add_format_arg(get_p)

    list_p = node_sub.add_parser("list", aliases=["ls"], help="List nodes")
    list_p.add_argument("--cluster", default="", help="Only nodes matching this cluster name")
    add_format_arg(list_p)

    rm_p = node_sub.add_parser("delete", aliases=["rm", "del", "remove"], help="Delete a node")
    rm_p.add_argument("name", help="Node name")

def cmd_node(args, config: KubefireConfig):
    """
    cmd_node: handles 'node' command
    """
    manager = config.node_manager()

    if args.action == "get":
        print_nodes([manager.get_node(args.name)], args.format)
    elif args.action in ("list", "ls"):
        print_nodes(manager.list_nodes(args.cluster), args.format)
    elif args.action in ("delete", "rm", "del", "remove"):
        manager.delete_node(args.name)
        success(f"Deleted node '{args.name}'")

def add_format_arg(parser):
    parser.add_argument("--format", choices=["table", "json"], default="table",
                        help="Output format")

def print_nodes(nodes: List[NodeRecord], fmt: str = "table"):
    """
    print_nodes: prints node records as a table or JSON
    """
    if fmt == "json":
        print(json.dumps([n.to_dict() for n in nodes], indent=2))
        return

    if not nodes:
        info("No nodes found")
        return

    heading("Nodes")
    rows = [
        [n.name, n.spec.cpus, n.spec.memory, n.spec.disk_size,
         "Running" if n.status.running else "Stopped"]
        for n in nodes
    ]
    print(format_table(["NAME", "CPUS", "MEMORY", "DISK", "STATUS"], rows))

if __name__ == "__main__":
    sys.exit(main())
