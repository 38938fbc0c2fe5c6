def format_info(depth, score, nodes, pruned, elapsed_ms, move):
    move_str = str(move) if move is not None else "-"
    nps = int(nodes * 1000 / elapsed_ms) if elapsed_ms > 0 else 0
    return (f"info depth {depth} score {score:g} nodes {nodes} pruned {pruned} "
            f"nps {nps} time {int(elapsed_ms)} move {move_str}")
