from .Optimizer import Optimizer


class SGDOptimizer(Optimizer):
    def __init__(self, lr=1e-2, weight_decay=0.0):
        if lr <= 0.0:
            raise ValueError("Learning rate must be greater than 0.")
        if weight_decay < 0.0:
            raise ValueError("Weight decay must be non-negative.")
        self.lr = lr
        self.wd = weight_decay

    def step(self, param, grad):
        if self.wd != 0.0:
            return self.lr * (grad + self.wd * param.w)  # L2 weight decay
        return self.lr * grad
