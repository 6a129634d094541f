from grid_duel.mcts.mcts import MCTSResult, MonteCarloTreeSearch, Node

__all__ = ["MCTSResult", "MonteCarloTreeSearch", "Node"]
