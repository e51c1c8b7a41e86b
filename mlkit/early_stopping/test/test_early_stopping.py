import unittest

from mlkit.early_stopping import EarlyStopping


class FakeModel:

    def __init__(self):
        self.value = 0
        self.restored = None

    def snapshot(self):
        return self.value

    def load_snapshot(self, snapshot):
        self.restored = snapshot


class TestEarlyStopping(unittest.TestCase):

    def test_stops_after_patience_and_restores_best(self):
        model = FakeModel()
        stopper = EarlyStopping(patience=2, monitor="loss")

        losses = [1.0, 0.5, 0.7, 0.6]
        stopped_at = None
        for epoch, loss in enumerate(losses, start=1):
            model.value = epoch
            if stopper.update(epoch, {"loss": loss}, model):
                stopped_at = epoch
                break

        self.assertEqual(stopped_at, 4)
        self.assertEqual(stopper.best_epoch, 2)
        self.assertEqual(model.restored, 2)

    def test_max_mode(self):
        model = FakeModel()
        stopper = EarlyStopping(patience=1, monitor="val_acc", mode="max",
                                restore_best_weights=False)
        self.assertFalse(stopper.update(1, {"val_acc": 0.5}, model))
        self.assertFalse(stopper.update(2, {"val_acc": 0.9}, model))
        self.assertTrue(stopper.update(3, {"val_acc": 0.9}, model))
        self.assertIsNone(model.restored)

    def test_baseline_must_be_beaten(self):
        model = FakeModel()
        stopper = EarlyStopping(patience=2, monitor="loss", baseline=0.5)
        self.assertFalse(stopper.update(1, {"loss": 0.8}, model))
        self.assertTrue(stopper.update(2, {"loss": 0.6}, model))
        self.assertEqual(stopper.best_epoch, -1)
        self.assertIsNone(model.restored)

    def test_reset(self):
        model = FakeModel()
        stopper = EarlyStopping(patience=1, monitor="loss")
        stopper.update(1, {"loss": 1.0}, model)
        stopper.update(2, {"loss": 2.0}, model)
        self.assertTrue(stopper.stopped)

        stopper.reset()
        self.assertFalse(stopper.stopped)
        self.assertIsNone(stopper.best)
        self.assertEqual(stopper.wait, 0)

    def test_missing_metric(self):
        with self.assertRaises(KeyError):
            EarlyStopping(monitor="val_loss").update(1, {"loss": 1.0}, FakeModel())

    def test_invalid(self):
        with self.assertRaises(ValueError):
            EarlyStopping(patience=0)
        with self.assertRaises(ValueError):
            EarlyStopping(mode="sideways")
        with self.assertRaises(ValueError):
            EarlyStopping(min_delta=-1.0)


if __name__ == '__main__':
    unittest.main()
