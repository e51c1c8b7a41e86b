class Optimizer:
    # Subclasses override as needed
    def initialize(self, param):
        # Register state for a newly allocated Parameter
        pass

    def step(self, param, grad):
        # Return the delta to subtract from param.w
        raise NotImplementedError
