"""Reference networks and activations."""

from .activations import ACTIVATIONS, Activation, get_activation, list_activations
from .network import NeuralNetwork, NetworkConfig, FunctionNetwork, create_network_for

__all__ = [
    'ACTIVATIONS',
    'Activation',
    'get_activation',
    'list_activations',
    'NeuralNetwork',
    'NetworkConfig',
    'FunctionNetwork',
    'create_network_for',
]
